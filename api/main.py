import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from markflow import clock, law_engine, lifecycle
from markflow.business_calendar import federal_holidays
from markflow.docket import NotComputable, compute_matter_deadlines
from markflow.models import Deadline, DeadlineStatus, DeadlineType, FilingBasis, Matter
from markflow.portfolio import MatterPortfolio
from markflow.settings import API_DEBUG, Settings, configure_logging
from markflow.status_codes import FILING_BASIS_LABELS, status_info
from .deps import get_portfolio, get_settings

configure_logging("DEBUG" if API_DEBUG else None)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="MarkFlow API",
    version="0.1.0",
    description="HTTP layer over the trademark deadline engine and matter registry.",
)

# --- CORS ----------------------------------------------------------
# Dashboard dev servers.
origins = [
    "http://localhost:5173",    # Vite dev server default port
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


# ---------- request / response bodies ----------
class OfficeActionRequest(BaseModel):
    issue_date: date
    filing_basis: str = Field(..., description="Registry basis code, e.g. '1(b)' or '66(a)'")
    extension_filed: bool = False
    as_of: Optional[date] = None


class MaintenanceRequest(BaseModel):
    registration_date: date


class StatementOfUseRequest(BaseModel):
    noa_date: date
    extensions_used: int = 0
    as_of: Optional[date] = None


class OppositionRequest(BaseModel):
    publication_date: date
    extension_days: int = 0
    as_of: Optional[date] = None


class MatterIn(BaseModel):
    serial_number: str = Field(..., min_length=1)
    mark_text: str
    filing_date: date
    filing_basis: FilingBasis
    status_code: int
    registration_date: Optional[date] = None
    registration_number: Optional[str] = None
    office_action_date: Optional[date] = None
    office_action_extension_filed: bool = False
    noa_date: Optional[date] = None
    sou_extensions_used: int = 0
    publication_date: Optional[date] = None
    opposition_extension_days: int = 0
    client: Optional[str] = None
    notes: Optional[str] = None


class DeadlineIn(BaseModel):
    deadline_type: DeadlineType
    due_date: date
    is_extended: bool = False
    notes: Optional[str] = None
    issue_date: Optional[date] = None


class ExtensionIn(BaseModel):
    extension_days: int = Field(0, description="Days granted; opposition extensions only")


def _matter_out(m: Matter) -> Dict[str, Any]:
    info = status_info(m.status_code)
    out = asdict(m)
    out.update(
        status_label=info.label,
        status_category=info.category,
        filing_basis_label=FILING_BASIS_LABELS[m.filing_basis],
    )
    return out


def _derived_out(result) -> Dict[str, Any]:
    if isinstance(result, NotComputable):
        return {"computable": False, "missing_field": result.missing_field, "reason": result.reason}
    return {"computable": True, **asdict(result)}


# ---------- health-check ----------
@app.get("/")
def root():
    return {"status": "ok", "msg": "MarkFlow API is alive"}


# ---------- calculators ----------
@app.get("/holidays/{year}", response_model=List[date])
def holidays(year: int):
    return sorted(federal_holidays(year))


@app.post("/calculate/office-action")
def office_action(req: OfficeActionRequest):
    return law_engine.calculate_office_action_deadline(
        req.issue_date, req.filing_basis, req.extension_filed, clock.resolve(req.as_of)
    )


@app.post("/calculate/maintenance")
def maintenance(req: MaintenanceRequest):
    return law_engine.calculate_maintenance_deadlines(req.registration_date)


@app.post("/calculate/statement-of-use")
def statement_of_use(req: StatementOfUseRequest):
    return law_engine.calculate_statement_of_use_deadline(
        req.noa_date, req.extensions_used, clock.resolve(req.as_of)
    )


@app.post("/calculate/opposition")
def opposition(req: OppositionRequest):
    return law_engine.calculate_opposition_deadline(
        req.publication_date, req.extension_days, clock.resolve(req.as_of)
    )


@app.get("/urgency")
def urgency(days: int, status: DeadlineStatus = DeadlineStatus.OPEN):
    return {"urgency": law_engine.deadline_urgency(days, status)}


# ---------- matters ----------
@app.post("/matters", status_code=201)
def add_matter(body: MatterIn, pm: MatterPortfolio = Depends(get_portfolio)):
    try:
        matter = Matter(**body.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    pm.add(matter)
    return {"serial_number": matter.serial_number}


@app.get("/matters")
def list_matters(
    q: Optional[str] = Query(None, min_length=2, description="Mark text / serial / registration search"),
    category: Optional[str] = Query(None, description="Status category filter"),
    pm: MatterPortfolio = Depends(get_portfolio),
):
    matters = pm.search(q) if q else list(pm)
    if category:
        matters = [m for m in matters if status_info(m.status_code).category == category]
    return [_matter_out(m) for m in matters]


@app.get("/matters/{serial}")
def get_matter(serial: str, pm: MatterPortfolio = Depends(get_portfolio)):
    try:
        return _matter_out(pm.get(serial))
    except KeyError:
        raise HTTPException(status_code=404, detail="Matter not found")


@app.delete("/matters/{serial}", status_code=204)
def delete_matter(serial: str, pm: MatterPortfolio = Depends(get_portfolio)):
    try:
        pm.remove(serial)
    except KeyError:
        raise HTTPException(status_code=404, detail="Matter not found")
    return Response(status_code=204)


@app.get("/matters/{serial}/docket")
def matter_docket(serial: str, as_of: Optional[date] = None, pm: MatterPortfolio = Depends(get_portfolio)):
    """Synthesized maintenance deadlines plus stored deadlines, annotated with urgency."""
    try:
        return pm.docket(serial, clock.resolve(as_of))
    except KeyError:
        raise HTTPException(status_code=404, detail="Matter not found")


@app.get("/matters/{serial}/derived")
def matter_derived(serial: str, as_of: Optional[date] = None, pm: MatterPortfolio = Depends(get_portfolio)):
    """Deadlines the engine derives from the matter's own dates, keyed by type."""
    try:
        matter = pm.get(serial)
    except KeyError:
        raise HTTPException(status_code=404, detail="Matter not found")
    derived = compute_matter_deadlines(matter, clock.resolve(as_of))
    return {kind.value: _derived_out(result) for kind, result in derived.items()}


@app.post("/matters/{serial}/deadlines", status_code=201)
def add_deadline(serial: str, body: DeadlineIn, pm: MatterPortfolio = Depends(get_portfolio)):
    try:
        deadline = pm.add_deadline(Deadline(matter_serial=serial, **body.model_dump()))
    except KeyError:
        raise HTTPException(status_code=404, detail="Matter not found")
    logger.info(f"docketed {deadline.deadline_type} for {serial} due {deadline.due_date}")
    return deadline


# ---------- deadlines ----------
@app.get("/deadlines/upcoming")
def upcoming(
    as_of: Optional[date] = None,
    within_days: Optional[int] = Query(None, ge=0),
    pm: MatterPortfolio = Depends(get_portfolio),
    cfg: Settings = Depends(get_settings),
):
    as_of = clock.resolve(as_of)
    if within_days is None:
        within_days = cfg.urgent_window_days
    out = []
    for d in pm.upcoming_deadlines(as_of, within_days):
        info = law_engine.format_deadline_with_urgency(d.due_date, d.status, as_of)
        out.append({**asdict(d), **asdict(info)})
    return out


def _load_deadline(pm: MatterPortfolio, deadline_id: int) -> Deadline:
    try:
        return pm.get_deadline(deadline_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Deadline not found")


@app.post("/deadlines/{deadline_id}/complete")
def complete_deadline(deadline_id: int, pm: MatterPortfolio = Depends(get_portfolio)):
    deadline = _load_deadline(pm, deadline_id)
    try:
        lifecycle.complete(deadline)
    except ValueError as exc:
        logger.warning(f"deadline {deadline_id}: {exc}")
        raise HTTPException(status_code=422, detail=str(exc))
    pm.update_deadline(deadline)
    return deadline


@app.post("/deadlines/{deadline_id}/extension")
def extend_deadline(deadline_id: int, body: ExtensionIn, pm: MatterPortfolio = Depends(get_portfolio)):
    deadline = _load_deadline(pm, deadline_id)
    try:
        matter = pm.get(deadline.matter_serial)
    except KeyError:
        raise HTTPException(status_code=404, detail="Matter not found")
    try:
        lifecycle.record_extension(deadline, matter, body.extension_days)
    except ValueError as exc:
        logger.warning(f"deadline {deadline_id}: {exc}")
        raise HTTPException(status_code=422, detail=str(exc))
    pm.add(matter)
    pm.update_deadline(deadline)
    return deadline


# ---------- GET /kpi ----------
@app.get("/kpi")
def kpi(as_of: Optional[date] = None, pm: MatterPortfolio = Depends(get_portfolio)):
    return pm.kpi_summary(clock.resolve(as_of))
