# core/config.py
# Configures core host behaviours via the .env file.  These rarely need changing.  Per-script
# customisation should be done via settings.

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PHYSICS_FPS                     =   int(os.getenv("PHYSICS_FPS",                        10))
LOG_LEVEL                       =       os.getenv("LOG_LEVEL",                   "WARNING")
SCRIPT_ENCODING                 =       os.getenv("SCRIPT_ENCODING",               "utf-8")
SETTINGS_FILE_NAME              =       os.getenv("SETTINGS_FILE_NAME",    "settings.yaml")

HANDLERS_FILE                   =  Path(os.getenv("HANDLERS_FILE",
                                                  Path(__file__).parent / "resources" / "handlers.yaml"))
