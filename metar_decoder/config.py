import os
from dotenv import load_dotenv

load_dotenv()

METAR_SOURCE_URL = os.getenv(
    "METAR_SOURCE_URL",
    "https://tgftp.nws.noaa.gov/data/observations/metar/stations/",
)
METAR_FETCH_TIMEOUT = float(os.getenv("METAR_FETCH_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

if not METAR_SOURCE_URL.endswith("/"):
    METAR_SOURCE_URL += "/"
