from __future__ import annotations

import json
import logging
from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST
from pydantic import ValidationError

from trip_planner.exceptions import ExternalServiceError, InvalidInputError, NoRouteFoundError
from trip_planner.schemas import (
    HistoryEntryResponse,
    HistoryResponse,
    MonthlyExpenseResponse,
    TripPlanRequest,
    TripPlanResponse,
)
from trip_planner.services.history import aggregate_monthly
from trip_planner.services.history_store import HistoryStore
from trip_planner.services.planner import TripPlannerService, from_response, to_response
from trip_planner.services.types import HistoryEntry

logger = logging.getLogger(__name__)

LAST_TRIP_SESSION_KEY = "last_trip"

_planner_service: TripPlannerService | None = None


def get_trip_planner() -> TripPlannerService:
    global _planner_service
    if _planner_service is None:
        _planner_service = TripPlannerService()
    return _planner_service


@require_GET
def health_view(_: HttpRequest) -> HttpResponse:
    return JsonResponse(
        {
            "status": "ok",
            "history": {"entries": HistoryStore().count()},
            "maps_configured": bool(settings.GOOGLE_MAPS_API_KEY),
        }
    )


@csrf_exempt
@require_POST
def trip_plan_view(request: HttpRequest) -> HttpResponse:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    try:
        trip_request = TripPlanRequest.model_validate(payload)
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid request payload",
                    "details": exc.errors(include_url=False, include_context=False),
                }
            },
            status=400,
        )

    planner = get_trip_planner()
    try:
        result = planner.plan(trip_request)
    except InvalidInputError as exc:
        return _error_response("invalid_input", str(exc), status=400)
    except NoRouteFoundError as exc:
        return _error_response("no_route", str(exc), status=502)
    except ExternalServiceError as exc:
        logger.error("Trip planning failed upstream: %s", exc)
        return _error_response("upstream_error", str(exc), status=502)

    response_data = to_response(result).model_dump(mode="json")
    request.session[LAST_TRIP_SESSION_KEY] = response_data
    return JsonResponse(response_data, status=200)


@csrf_exempt
@require_http_methods(["GET", "POST", "DELETE"])
def history_view(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        return _save_last_trip(request)

    store = HistoryStore()
    if request.method == "DELETE":
        store.clear()
        return HttpResponse(status=204)

    entries = store.read()
    response = HistoryResponse(
        entries=[_entry_response(entry) for entry in entries],
        monthly_expenses=[
            MonthlyExpenseResponse(month=aggregate.month, cost=round(aggregate.cost, 2))
            for aggregate in aggregate_monthly(entries)
        ],
        currency=settings.CURRENCY,
    )
    return JsonResponse(response.model_dump(mode="json"), status=200)


def _save_last_trip(request: HttpRequest) -> HttpResponse:
    last_trip = request.session.get(LAST_TRIP_SESSION_KEY)
    if last_trip is None:
        return _error_response("no_trip_result", "Plan a trip before saving it", status=409)

    planner = get_trip_planner()
    entry = planner.save_trip(from_response(TripPlanResponse.model_validate(last_trip)))
    return JsonResponse(_entry_response(entry).model_dump(mode="json"), status=201)


def _entry_response(entry: HistoryEntry) -> HistoryEntryResponse:
    return HistoryEntryResponse(
        id=entry.entry_id,
        date=entry.timestamp,
        vehicle=entry.vehicle,
        origin_name=entry.origin_name,
        destination_name=entry.destination_name,
        distance_km=entry.distance_km,
        cost=entry.cost,
    )


def _parse_json_payload(request: HttpRequest) -> dict[str, Any] | JsonResponse:
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except json.JSONDecodeError:
        return _error_response("invalid_json", "Request body must be valid JSON", status=400)

    if not isinstance(payload, dict):
        return _error_response("invalid_json", "JSON body must be an object", status=400)

    return payload


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)
