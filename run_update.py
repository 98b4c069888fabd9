import sys
from dotenv import load_dotenv, find_dotenv

# Load .env if present (CI uses env vars); must happen before the HTTP settings are read
dotenv_path = find_dotenv(usecwd=True)
if dotenv_path:
    load_dotenv(dotenv_path, override=False)

from comic_mirror.cli import main

if __name__ == "__main__":
    sys.exit(main())
