import logging
from metar_decoder import config

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

logger.info("🔧 Configuration:")
logger.info(f"   METAR_SOURCE_URL: {config.METAR_SOURCE_URL}")
logger.info(f"   METAR_FETCH_TIMEOUT: {config.METAR_FETCH_TIMEOUT}s")

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from metar_decoder.errors import MetarFetchError, ParseError
from metar_decoder.models.response import BatchRequest, BatchResult, DecodeRequest, DecodeResponse
from metar_decoder.services.batch import decode_batch, failure_from_error
from metar_decoder.services.decoder import decode, decode_with_date
from metar_decoder.services.fetcher import get_observation, normalize_station
from metar_decoder.services.summary import describe_observation

app = FastAPI(
    title="METAR Decoder",
    description="Decodes METAR/SPECI aviation weather reports into structured observations",
    version="1.0.0",
    docs_url="/docs" if config.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if config.ENVIRONMENT != "production" else None
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "HEAD", "OPTIONS"],
    allow_headers=["*"],
)


def _parse_error_detail(record: str, error: ParseError) -> dict:
    return failure_from_error(record, error).model_dump(exclude_none=True)


@app.get("/")
@app.head("/")
def health():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": "METAR Decoder",
        "version": "1.0.0",
        "source_url": config.METAR_SOURCE_URL,
    }


@app.post("/decode", response_model=DecodeResponse)
def decode_report(req: DecodeRequest):
    logger.info(f"🛫 Decoding report: {req.report}")
    try:
        if req.date_line:
            observation = decode_with_date(req.date_line, req.report)
        else:
            observation = decode(req.report)
    except ParseError as e:
        logger.warning(f"❌ Decode failed: {e}")
        raise HTTPException(status_code=422, detail=_parse_error_detail(req.report, e))

    return DecodeResponse(observation=observation, summary=describe_observation(observation))


@app.post("/decode/batch", response_model=BatchResult)
def decode_report_batch(req: BatchRequest):
    return decode_batch(req.text)


@app.get("/metar/{station}", response_model=DecodeResponse)
def station_report(station: str):
    try:
        code = normalize_station(station)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"📡 Processing {code}")
    try:
        observation = get_observation(code)
    except MetarFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ParseError as e:
        logger.warning(f"❌ Decode failed for {code}: {e}")
        raise HTTPException(status_code=422, detail=_parse_error_detail(e.report or "", e))

    if observation is None:
        raise HTTPException(status_code=404, detail=f"No METAR available for {code}")

    logger.info(f"✅ Got weather for {code}")
    return DecodeResponse(observation=observation, summary=describe_observation(observation))
