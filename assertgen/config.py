from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv  # type: ignore

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
BUNDLED_TEMPLATES_DIR = BASE_DIR / "generator" / "templates"

# user templates override the bundled ones file by file
TEMPLATES_DIR = Path(os.getenv("ASSERTGEN_TEMPLATES_DIR") or BUNDLED_TEMPLATES_DIR)
OUTPUT_DIR = Path(os.getenv("ASSERTGEN_OUTPUT_DIR") or ".")

GENERATED_ASSERTIONS_PACKAGE = (os.getenv("ASSERTGEN_PACKAGE") or "").strip() or None
GENERATE_ASSERTIONS_FOR_ALL_FIELDS = os.getenv("ASSERTGEN_ALL_FIELDS", "false").lower() in ("1", "true", "yes")
INCLUDED_ANNOTATIONS = ("GenerateAssertion",)

LOG_LEVEL = os.getenv("ASSERTGEN_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

API_TITLE = "Assertion Generator (Java -> AssertJ custom assertions)"
API_HOST = os.getenv("ASSERTGEN_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("ASSERTGEN_API_PORT", "8000"))
