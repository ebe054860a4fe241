"""Application services of the hotel context."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ...command import Command, command_type
from ...command_service import CommandExecutor, CommandService
from ...entity_id import new_id
from ...ports import Repository
from ...query import Query, QueryResponse, query_type
from ...query_service import QueryExecutor, QueryService
from .domain import BookRoom, CreateRoom, GuestInRoom, Guests, Room


def guests_query_executor(view: Guests) -> QueryExecutor:
    """Answer guest queries from ``view``."""

    def execute(query: Query, ctx: Mapping[str, Any] | None = None) -> QueryResponse:
        criteria = query.filter
        if isinstance(criteria, GuestInRoom):
            return QueryResponse(view.guest_in_room(criteria.number), 1, 0, 1)
        raise ValueError(f"unknown query type {query_type(criteria)}")

    return execute


def guests_service(view: Guests) -> QueryService:
    return QueryService(guests_query_executor(view), GuestInRoom)


class RoomService(CommandService):
    """Creates and books rooms, then publishes the rooms' events."""

    def __init__(self, repo: Repository[Room]) -> None:
        super().__init__(room_command_executor(self, repo), CreateRoom, BookRoom)

    def create(self, repo: Repository[Room], cmd: CreateRoom) -> Room:
        room = Room(cmd.number, cmd.room_type)
        repo.save(room)
        return room

    def book(self, repo: Repository[Room], cmd: BookRoom) -> Room:
        room = repo.load(new_id(cmd.number))
        room.book(cmd.from_, cmd.to)
        repo.update(room)
        return room


def room_command_executor(service: RoomService, repo: Repository[Room]) -> CommandExecutor:
    """Execute room commands with ``service`` against ``repo``."""

    def execute(command: Command, ctx: Mapping[str, Any] | None = None) -> None:
        body = command.body
        if isinstance(body, CreateRoom):
            room = service.create(repo, body)
        elif isinstance(body, BookRoom):
            room = service.book(repo, body)
        else:
            raise ValueError(f"unknown command type {command_type(body)}")
        service.dispatch_from(room, ctx)

    return execute


def room_service(repo: Repository[Room]) -> RoomService:
    return RoomService(repo)