"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict, List

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from wealthplan.core.capacity import calculate_capacity
from wealthplan.core.net_worth import (
    allocation_by_category,
    project_net_worth,
    summarize_items,
)
from wealthplan.core.projection import (
    NonFiniteProjectionError,
    compute_baseline,
    compute_rebased,
)
from wealthplan.core.variance import compute_variance
from wealthplan.domain.actuals import ActualsValidationError, actuals_warnings
from wealthplan.models import Budget
from wealthplan.schemas.forecast import (
    BaselineRequest,
    BaselineResponse,
    OutlookRequest,
    OutlookResponse,
    YearRow,
)
from wealthplan.schemas.planning import (
    AdviceResponse,
    HoldingsRequest,
    NetWorthResponse,
)
from wealthplan.storage.repository import check_slot_key

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    errors = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": errors}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(ActualsValidationError)
def _handle_actuals_error(exc: ActualsValidationError):
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(NonFiniteProjectionError)
def _handle_non_finite(exc: NonFiniteProjectionError):
    return jsonify({"detail": str(exc)}), HTTPStatus.UNPROCESSABLE_ENTITY


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _presented(rows: List[YearRow]) -> List[YearRow]:
    if request.args.get("precision") == "full":
        return rows
    return [row.for_display() for row in rows]


def _collaborators() -> Dict[str, Any]:
    return current_app.extensions["wealthplan"]


@api_bp.post("/forecast/baseline")
def baseline() -> Any:
    """Initial projection from the schedule alone."""
    payload = BaselineRequest.model_validate(_payload())
    rows = compute_baseline(payload.startingBalance, payload.schedule)
    response = BaselineResponse(rows=_presented(rows))
    return jsonify(response.model_dump())


@api_bp.post("/forecast/outlook")
def outlook() -> Any:
    """Baseline, rebased and actual series with the variance headline."""
    payload = OutlookRequest.model_validate(_payload())
    rows = compute_rebased(payload.startingBalance, payload.schedule, payload.actuals)
    response = OutlookResponse(
        rows=_presented(rows),
        variance=compute_variance(rows),
        warnings=actuals_warnings(payload.actuals),
    )
    return jsonify(response.model_dump())


@api_bp.post("/net-worth")
def net_worth() -> Any:
    payload = HoldingsRequest.model_validate(_payload())
    response = NetWorthResponse(
        snapshot=summarize_items(payload.items),
        allocation=allocation_by_category(payload.items),
        projection=project_net_worth(payload.items, payload.settings),
    )
    return jsonify(response.model_dump())


@api_bp.post("/capacity")
def capacity() -> Any:
    budget = Budget.model_validate(_payload())
    return jsonify(calculate_capacity(budget).model_dump())


@api_bp.get("/slots/<key>")
def load_slot(key: str) -> Any:
    try:
        check_slot_key(key)
    except ValueError as exc:
        return jsonify({"detail": str(exc)}), HTTPStatus.BAD_REQUEST

    value = _collaborators()["repository"].load(key)
    if value is None:
        return jsonify({"detail": f"slot {key!r} not found"}), HTTPStatus.NOT_FOUND
    return jsonify(value)


@api_bp.put("/slots/<key>")
def save_slot(key: str) -> Any:
    try:
        check_slot_key(key)
    except ValueError as exc:
        return jsonify({"detail": str(exc)}), HTTPStatus.BAD_REQUEST

    value = _payload()
    if value is None:
        return jsonify({"detail": "slot body must not be null"}), HTTPStatus.BAD_REQUEST

    _collaborators()["repository"].save(key, value)
    current_app.logger.debug("saved slot %s", key)
    return "", HTTPStatus.NO_CONTENT


@api_bp.post("/advice")
def advice() -> Any:
    advisor = _collaborators()["advisor"]
    if advisor is None:
        return jsonify({"detail": "advice generation is not configured"}), HTTPStatus.SERVICE_UNAVAILABLE

    payload = HoldingsRequest.model_validate(_payload())
    response = AdviceResponse(advice=advisor.advise(payload.items, payload.settings))
    return jsonify(response.model_dump())
