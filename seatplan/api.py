from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse

from seatplan.config import get_settings
from seatplan.database import SessionLocal, init_db
from seatplan.logging_config import configure_logging
from seatplan.models import OptimizationOptions, OptimizationResult, SolveRequest
from seatplan.service import optimize_venue
from seatplan.solver.core import optimize
from seatplan.store import DataStore, SqlDataStore

configure_logging(get_settings().log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Seatplan Optimizer API", lifespan=lifespan)


def get_data_store(event_id: str) -> DataStore:
    return SqlDataStore(SessionLocal, venue_id=event_id)


@app.get("/")
def health_check():
    return {"status": "ok", "message": "Seatplan Optimizer API is running"}


@app.post("/solve", response_model=OptimizationResult)
def solve_endpoint(request: SolveRequest):
    """Optimize the posted snapshot without persisting anything."""
    result = optimize(
        request.attendees,
        request.tables,
        request.relationships,
        request.options,
        seats=request.seats,
    )
    if not result.success:
        return JSONResponse(status_code=400, content=result.model_dump())
    return result


@app.post("/events/{event_id}/optimize", response_model=OptimizationResult)
def optimize_event_endpoint(
    options: OptimizationOptions,
    store: DataStore = Depends(get_data_store),
):
    result = optimize_venue(store, options)
    if result.error_type == "OptimizationInProgressError":
        raise HTTPException(status_code=409, detail=result.message)
    return result
