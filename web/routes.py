"""
REST API routes for the honk Web API.
"""

import logging

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, StrictInt

from honk_platform import ConstraintViolationError, InvalidInputError, StorageUnavailableError
from honk_platform.runtime.config import LEADERBOARD_LIMIT

from .session_manager import LedgerNotReadyError, WebLedgerManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# Single shared ledger manager (single-user local tool)
ledger_mgr = WebLedgerManager()


# --- Request models ---

class VoteRequest(BaseModel):
    plate: str
    value: StrictInt


class VisibilityRequest(BaseModel):
    state: str


class ProfileRequest(BaseModel):
    name: str


# --- Helper ---

def _facade():
    try:
        return ledger_mgr.require()
    except LedgerNotReadyError as e:
        raise HTTPException(status_code=503, detail=str(e))


# ---------------------------------------------------------------------------
# Votes and leaderboards
# ---------------------------------------------------------------------------

@router.get("/health")
async def health():
    """Liveness plus whether the ledger has been booted."""
    return {"ok": True, "ready": ledger_mgr.is_ready}


@router.post("/votes")
async def record_vote(req: VoteRequest):
    """Record a +1/-1 vote against a plate."""
    facade = _facade()
    try:
        receipt = await facade.record_vote(req.plate, req.value)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConstraintViolationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if not receipt.persisted:
        logger.warning("Vote for %s recorded in memory only", receipt.vote.plate_text)
    return receipt.to_dict()


@router.get("/leaderboard")
async def leaderboard(limit: int = Query(LEADERBOARD_LIMIT, ge=0, description="Rows per list")):
    """Most upvoted and most downvoted plates."""
    return _facade().leaderboard(limit).to_dict()


@router.get("/leaderboard/best")
async def leaderboard_best(limit: int = Query(LEADERBOARD_LIMIT, ge=0)):
    return {"best": [e._asdict() for e in _facade().top_positive(limit)]}


@router.get("/leaderboard/worst")
async def leaderboard_worst(limit: int = Query(LEADERBOARD_LIMIT, ge=0)):
    return {"worst": [e._asdict() for e in _facade().top_negative(limit)]}


@router.post("/reset")
async def reset_database():
    """Delete every plate and vote. The client asks for confirmation first."""
    persisted = await _facade().reset()
    return {"reset": True, "persisted": persisted}


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

@router.post("/lifecycle/visibility")
async def visibility_changed(req: VisibilityRequest):
    """Schedule a best-effort snapshot when the client goes hidden."""
    facade = _facade()
    if req.state != "hidden":
        return {"flush_scheduled": False}
    task = facade.flush_in_background()
    return {"flush_scheduled": task is not None}


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

@router.get("/profile")
async def get_profile():
    try:
        name = await _facade().profiles.get_display_name()
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"name": name, "signed_in": name is not None}


@router.put("/profile")
async def set_profile(req: ProfileRequest):
    try:
        name = await _facade().profiles.set_display_name(req.name)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"name": name, "signed_in": True}


@router.delete("/profile")
async def clear_profile():
    try:
        await _facade().profiles.clear()
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"name": None, "signed_in": False}
