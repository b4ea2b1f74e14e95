"""API dependencies."""

from __future__ import annotations

from fastapi import Request

from rollsum.services.accumulator import Accumulator


def get_accumulator(request: Request) -> Accumulator:
    return request.app.state.accumulator
