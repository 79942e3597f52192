from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()

APP_NAME = "StudyStem"
APP_AUTHOR = "StudyStem"
DATA_DIR = Path(os.getenv("STUDYSTEM_DATA_DIR") or user_data_dir(APP_NAME, APP_AUTHOR))
LOG_FILE = DATA_DIR / "studystem.log"


def ensure_data_dir() -> Path:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return DATA_DIR
