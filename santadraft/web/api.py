from __future__ import annotations

import asyncio
import json
from typing import List, Optional, Tuple

from aiohttp import web
from loguru import logger

from santadraft.services.drafts import Draft, DraftService
from santadraft.services.errors import DraftError, DuplicateName, Infeasible, InvalidData, SolveExhausted
from santadraft.services.parsing import parse_participant_line, parse_participant_payload
from santadraft.services.rate_limit import RateLimiter

SERVICE_KEY = web.AppKey("service", DraftService)
LIMITER_KEY = web.AppKey("limiter", RateLimiter)

FORM_FIELDS = {"title", "date", "tickets", "seed"}

routes = web.RouteTableDef()


def draft_summary(draft: Draft) -> dict:
    return {
        "id": draft.id,
        "title": draft.title,
        "date": draft.date,
        "members": [{"name": member.name, "team": member.team} for member in draft.members],
        "created_at": draft.created_at.isoformat() if draft.created_at else None,
    }


def error_response(error: DraftError) -> web.Response:
    if isinstance(error, SolveExhausted):
        return web.json_response(
            {"error": error.kind, "message": "Could not draw tickets for this draft. Please try again."},
            status=500,
        )
    if isinstance(error, (InvalidData, DuplicateName, Infeasible)):
        return web.json_response(error.to_dict(), status=400)
    return web.json_response({"error": error.kind, "message": "Internal error."}, status=500)


def not_found(what: str) -> web.Response:
    return web.json_response({"error": "not_found", "message": f"{what} not found."}, status=404)


def _draft_id(request: web.Request) -> Optional[int]:
    try:
        return int(request.match_info["draft_id"])
    except ValueError:
        return None


async def _read_submission(request: web.Request) -> Tuple[str, str, List[Tuple[str, Optional[int]]], Optional[str]]:
    if request.content_type == "application/json":
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidData("Request body is not valid JSON.") from exc
        if not isinstance(body, dict):
            raise InvalidData("Request body must be a JSON object.")
        return (
            body.get("title"),
            body.get("date"),
            parse_participant_payload(body.get("participants")),
            body.get("seed"),
        )

    form = await request.post()
    for key, value in form.items():
        if key not in FORM_FIELDS:
            raise InvalidData(f"Unexpected field: {key!r}.")
        if not isinstance(value, str) or not value.strip():
            raise InvalidData(f"Field {key!r} must not be empty.")
    participants = [parse_participant_line(line) for line in form.getall("tickets", [])]
    return form.get("title"), form.get("date"), participants, form.get("seed")


def _client_key(request: web.Request, action: str) -> str:
    return f"{request.remote}:{action}"


@routes.get("/health")
async def health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok", "drafts": request.app[SERVICE_KEY].store.count()})


@routes.get("/api/draft")
async def list_drafts(request: web.Request) -> web.Response:
    drafts = request.app[SERVICE_KEY].list_drafts()
    return web.json_response([draft_summary(draft) for draft in drafts])


@routes.post("/api/draft")
async def create_draft(request: web.Request) -> web.Response:
    limit = request.app[LIMITER_KEY].allow(_client_key(request, "create"))
    if not limit.allowed:
        return web.json_response(
            {"error": "rate_limited", "message": "Too many drafts. Please slow down."},
            status=429,
            headers={"Retry-After": str(int(limit.retry_after) + 1)},
        )

    service = request.app[SERVICE_KEY]
    try:
        title, date, participants, seed = await _read_submission(request)
        loop = asyncio.get_running_loop()
        draft = await loop.run_in_executor(None, service.submit, title, date, participants, seed)
    except DraftError as exc:
        return error_response(exc)
    return web.json_response({"id": draft.id}, status=201)


@routes.get("/api/draft/{draft_id}")
async def get_draft(request: web.Request) -> web.Response:
    draft_id = _draft_id(request)
    draft = request.app[SERVICE_KEY].get_draft(draft_id) if draft_id is not None else None
    if draft is None:
        return not_found("Draft")
    return web.json_response(draft_summary(draft))


@routes.get("/api/draft/{draft_id}/ticket")
async def list_tickets(request: web.Request) -> web.Response:
    draft_id = _draft_id(request)
    draft = request.app[SERVICE_KEY].get_draft(draft_id) if draft_id is not None else None
    if draft is None:
        return not_found("Draft")
    return web.json_response(draft.member_names())


@routes.get("/api/draft/{draft_id}/ticket/{name}")
async def get_ticket(request: web.Request) -> web.Response:
    draft_id = _draft_id(request)
    name = request.match_info["name"]
    recipient = (
        request.app[SERVICE_KEY].lookup_recipient(draft_id, name) if draft_id is not None else None
    )
    if recipient is None:
        return not_found("Ticket")
    logger.bind(draft_id=draft_id).debug("Ticket revealed")
    return web.json_response({"name": name, "recipient": recipient})


@web.middleware
async def error_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception as exc:
        logger.bind(path=request.path, method=request.method).exception(
            "Request failed: {error}", error=str(exc)
        )
        return web.json_response({"error": "internal", "message": "Internal error."}, status=500)


def create_app(service: DraftService, limiter: Optional[RateLimiter] = None) -> web.Application:
    app = web.Application(middlewares=[error_middleware])
    app[SERVICE_KEY] = service
    app[LIMITER_KEY] = limiter or RateLimiter(max_calls=5, period_seconds=10)
    app.add_routes(routes)
    return app
