import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv(override=True)

@dataclass
class Settings:
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    # "filename" keeps the client's file name on disk, "key" names files by key
    NAMING: str = os.getenv("NAMING", "filename")
    TAMPER_PROBABILITY: float = float(os.getenv("TAMPER_PROBABILITY", "0.0"))
    TAMPER_PAYLOAD: str = os.getenv("TAMPER_PAYLOAD", "Some additonal data")
