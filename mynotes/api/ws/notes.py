from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from typing import Optional
import asyncio
import contextlib
import logging

from mynotes.core.dependencies import get_notes_repository
from mynotes.domains.notes.schemas import NoteResponse, PagedListMessage, PagedListResponse
from mynotes.paging.paged_list import ObservablePagedList, PagedList
from mynotes.repository import NotesRepository

logger = logging.getLogger(__name__)

router = APIRouter()


def serialize_snapshot(snapshot: PagedList) -> dict:
    """Снимок списка в виде сообщения WebSocket"""
    message = PagedListMessage(
        data=PagedListResponse(
            items=[NoteResponse.model_validate(note) for note in snapshot.items],
            epoch=snapshot.epoch,
            is_complete=snapshot.is_complete,
            change=snapshot.change
        )
    )
    return message.model_dump(mode="json")


class PageListConnection:
    """Подписка одного WebSocket-клиента на наблюдаемый список"""

    def __init__(self, websocket: WebSocket, page_list: ObservablePagedList):
        self.websocket = websocket
        self.page_list = page_list
        # Все исходящие сообщения идут через одну очередь, чтобы сохранить порядок
        self._outbox: asyncio.Queue = asyncio.Queue()
        self._sender: Optional[asyncio.Task] = None
        self._unsubscribe = None

    async def open(self):
        await self.websocket.accept()
        self._sender = asyncio.create_task(self._pump())
        self._unsubscribe = self.page_list.subscribe(self._on_snapshot)
        logger.info("Page list subscriber connected")

    def send(self, message: dict):
        self._outbox.put_nowait(message)

    async def close(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
        if self._sender is not None:
            self._sender.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sender

    def _on_snapshot(self, snapshot: PagedList):
        self.send(serialize_snapshot(snapshot))

    async def _pump(self):
        while True:
            message = await self._outbox.get()
            await self.websocket.send_json(message)


@router.websocket("/notes/ws")
async def notes_websocket(
    websocket: WebSocket,
    repository: NotesRepository = Depends(get_notes_repository)
):
    """WebSocket эндпоинт с push-обновлениями списка заметок"""
    connection = PageListConnection(websocket, repository.observable_page_list())
    await connection.open()

    try:
        while True:
            message = await websocket.receive_json()
            message_type = message.get("type")

            if message_type == "load_more":
                try:
                    await connection.page_list.load_more()
                except Exception as e:
                    logger.error(f"Failed to load more notes: {e!r}")
                    connection.send({
                        "type": "error",
                        "data": {"detail": "Failed to load more notes"}
                    })

            elif message_type == "refresh":
                connection.page_list.refresh()

            elif message_type == "ping":
                connection.send({"type": "pong"})

            else:
                connection.send({
                    "type": "error",
                    "data": {"detail": f"Unknown message type: {message_type}"}
                })

    except WebSocketDisconnect:
        logger.info("Page list subscriber disconnected")

    except Exception as e:
        logger.error(f"WebSocket error: {e}")

    finally:
        await connection.close()
