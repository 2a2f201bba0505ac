"""Global pytest configuration."""

import os

# Run tests against in-memory storage and the mock generator, before any imports
os.environ["DATABASE_URL"] = ""
os.environ["OPENAI_API_KEY"] = ""
