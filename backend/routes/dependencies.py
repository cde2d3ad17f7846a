"""Shared route dependencies."""

from fastapi import Request

from services.app_context import AppContext
from sockets.status_socket import StatusNotifier


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_notifier(request: Request) -> StatusNotifier:
    return request.app.state.notifier
