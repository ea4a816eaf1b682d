from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import List
from decimal import Decimal
import logging, os
from nevents.schemas import AtLeastNRequest, AtLeastNResponse, DistributionRequest, DistributionResponse, Health, MAX_EVENTS
from nevents.engine.tail_probability import probability_at_least_n, exact_distribution, resolve_precision, DEFAULT_PRECISION
from nevents.engine.parsing import parse_probabilities, ProbabilityParseError
from nevents.engine.guardrails import out_of_range_positions, violates_unit_interval

ENGINE_VERSION = "nevents-v1.0"

logger = logging.getLogger(__name__)

app = FastAPI(title="nevents API", version=ENGINE_VERSION)

origins = [o for o in os.environ.get("NEVENTS_CORS_ORIGINS", "*").split(",") if o]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    logger.info("nevents %s: precision=%d max_events=%d", ENGINE_VERSION, DEFAULT_PRECISION, MAX_EVENTS)

def load_probabilities(literals: List) -> List[Decimal]:
    # Parse errors and values outside [0,1] are rejected here, before the engine.
    try:
        probs = parse_probabilities(literals)
    except ProbabilityParseError as e:
        logger.warning("Rejected literal %r at position %d", e.literal, e.position)
        raise HTTPException(status_code=422, detail={
            "error": "parse_error",
            "literal": str(e.literal),
            "position": e.position,
        })
    if violates_unit_interval(probs):
        bad = out_of_range_positions(probs)
        logger.warning("Rejected %d probabilities outside [0,1]", len(bad))
        raise HTTPException(status_code=422, detail={
            "error": "out_of_range",
            "positions": bad,
        })
    return probs

@app.get("/api/health", response_model=Health)
def health():
    return {"status": "ok", "engine_version": ENGINE_VERSION}

@app.post("/api/at-least-n", response_model=AtLeastNResponse)
def at_least_n(req: AtLeastNRequest):
    probs = load_probabilities(req.probabilities)
    prec = resolve_precision(req.precision)
    prune = True if req.prune is None else req.prune
    result = probability_at_least_n(req.n, probs, precision=prec, prune=prune)
    return AtLeastNResponse(
        engine_version=ENGINE_VERSION,
        n=req.n,
        events=len(probs),
        precision=prec,
        probability=str(result),
    )

@app.post("/api/distribution", response_model=DistributionResponse)
def distribution(req: DistributionRequest):
    probs = load_probabilities(req.probabilities)
    prec = resolve_precision(req.precision)
    table = exact_distribution(probs, precision=prec)
    return DistributionResponse(
        engine_version=ENGINE_VERSION,
        events=len(probs),
        precision=prec,
        exact=[str(p) for p in table],
    )
