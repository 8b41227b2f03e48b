"""Global test configuration for security scan tests."""

from pathlib import Path

from dotenv import load_dotenv

# Integration tests read provider API keys from the project .env file
env_file = Path(__file__).parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file)
