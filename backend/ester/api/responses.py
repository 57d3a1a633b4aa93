"""Outcome Translation - turns ResourceOutcome values into FastAPI responses."""

from fastapi import Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ester.services.library_resource import ResourceOutcome


def to_response(outcome: ResourceOutcome) -> Response:
    """Empty body when outcome.body is None, JSON otherwise; headers copied as-is."""
    if outcome.body is None:
        return Response(status_code=outcome.status_code, headers=outcome.headers)
    return JSONResponse(
        status_code=outcome.status_code,
        content=jsonable_encoder(outcome.body),
        headers=outcome.headers,
    )
