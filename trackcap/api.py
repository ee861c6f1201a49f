import io, csv
import json
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, StreamingResponse, RedirectResponse, Response
from pydantic import BaseModel, Field, field_validator

from trackcap.core.config import CapacityConfig
from trackcap.core.models import GeneralParameters, MotionType, RouteModel
from trackcap.core.solver import evaluate_section
from trackcap.logging_config import configure_logging
from trackcap.sim.scenario import run_route, capacity_rows, route_from_payload, section_from_dict
from trackcap.sim.simulator import summarize_capacity, capacity_reserve

DATA_DIR = Path(__file__).parent / "data"

config = CapacityConfig()
configure_logging(config.log_level)

app = FastAPI(title="Track Capacity API")


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    # inputs the formula cannot evaluate, e.g. a headway too small to divide by
    return JSONResponse(status_code=422, content={"detail": str(exc)})


class GeneralParametersIn(BaseModel):
    window: int = Field(ge=0, le=1440)
    alpha_s: float = Field(gt=0, le=1)
    alpha_t: float = Field(gt=0, le=1)
    alpha_u: float = Field(gt=0, le=1)
    expected_interval: int = Field(ge=0)


class TrainPairsIn(BaseModel):
    qty: int = Field(default=0, ge=0)
    removal_coefficient: int = Field(default=1, ge=0)


class DirectionIn(BaseModel):
    primary_motion_type: MotionType
    primary_heavy: TrainPairsIn = Field(default_factory=TrainPairsIn)
    primary: TrainPairsIn = Field(default_factory=TrainPairsIn)
    secondary: TrainPairsIn = Field(default_factory=TrainPairsIn)
    suburban: TrainPairsIn = Field(default_factory=TrainPairsIn)


class SectionIn(BaseModel):
    id: str
    # negative headway is accepted and reported as a failed section
    period: float = Field(allow_inf_nan=False)
    odd_routes_present: bool = True
    even_routes_present: bool = True
    odd: DirectionIn
    even: DirectionIn


class RouteIn(BaseModel):
    general_parameters: GeneralParametersIn | None = None
    sections: List[SectionIn]

    @field_validator("sections")
    @classmethod
    def _unique_ids(cls, v: List[SectionIn]) -> List[SectionIn]:
        ids = [s.id for s in v]
        dupes = sorted({i for i in ids if ids.count(i) > 1})
        if dupes:
            raise ValueError(f"duplicate section ids: {', '.join(dupes)}")
        return v


class SectionRequest(BaseModel):
    general_parameters: GeneralParametersIn | None = None
    section: SectionIn


def _resolve_route(body: RouteIn) -> tuple[GeneralParameters, RouteModel]:
    gp, route = route_from_payload(body.model_dump())
    return gp or config.general_parameters(), route


def _route_response(gp: GeneralParameters, route: RouteModel) -> Dict[str, Any]:
    result = run_route(route, gp)
    required, used = result["required"], result["used"]
    return {
        "required": summarize_capacity(required.total),
        "used": summarize_capacity(used.total),
        "reserve": capacity_reserve(required.total, used.total),
        "failed_sections": required.failed_sections,
        "sections": {
            sid: {
                "required": summarize_capacity(cap),
                "used": summarize_capacity(used.by_section[sid]),
            }
            for sid, cap in required.by_section.items()
        },
    }


@app.get("/")
async def root() -> RedirectResponse:
    # Redirect base URL to interactive docs to avoid 404 confusion
    return RedirectResponse(url="/docs")


@app.get("/favicon.ico")
async def favicon() -> Response:
    return Response(status_code=204)


@app.get("/demo")
async def demo() -> Dict[str, Any]:
    payload = json.loads((DATA_DIR / "sample_route.json").read_text())
    body = RouteIn(**payload)
    gp, route = _resolve_route(body)
    return _route_response(gp, route)


@app.post("/capacity")
async def capacity(body: RouteIn) -> Dict[str, Any]:
    """Required, used and reserve capacity of a route of sections.

    The route total is failed as soon as one section is failed; the ids of
    those sections are listed in ``failed_sections``.
    """
    gp, route = _resolve_route(body)
    return _route_response(gp, route)


@app.post("/capacity/section")
async def section_capacity(body: SectionRequest) -> Dict[str, Any]:
    gp = GeneralParameters(**body.general_parameters.model_dump()) if body.general_parameters else config.general_parameters()
    section = section_from_dict(body.section.model_dump())
    required = evaluate_section(section, gp, mode="required")
    used = evaluate_section(section, gp, mode="used")
    return {
        "required": summarize_capacity(required),
        "used": summarize_capacity(used),
        "reserve": capacity_reserve(required, used),
    }


@app.post("/capacity.csv")
async def capacity_csv(body: RouteIn) -> StreamingResponse:
    gp, route = _resolve_route(body)
    rows = capacity_rows(run_route(route, gp))
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=[
        "section_id", "direction", "mode", "status",
        "primary_cargo", "secondary_passenger", "primary_passenger", "secondary_cargo",
    ])
    writer.writeheader()
    for r in rows:
        writer.writerow(r)
    buf.seek(0)
    return StreamingResponse(buf, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=capacity.csv"})
