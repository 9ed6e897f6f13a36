"""
API Routes for the timeline board.

This module exposes the board operations as REST endpoints. Every handler
goes through the process-wide :class:`ShowcaseBoard` held by the
:class:`~hypewaves.api.board_store.BoardStore`.

Endpoints
---------
- `GET /board`: Visible waves with group layout and card rectangles.
- `PUT /selection`, `POST /selection/waves/{index}/toggle`: View state.
- `POST /events`, `DELETE /events/{event_id}`: Event creation / cascade delete.
- `POST /gestures/start`, `POST /gestures/move`: Drive the connection draft.
- `GET /draft`, `POST /draft/commit`, `POST /draft/cancel`: Reason prompt.
- `GET /connections`, `DELETE /connections/{index}`: Confirmed connections.
- `GET /render`: Drawable curves and the live line.
- `POST /board/save`: Write the dataset back to disk.

Error Mapping
-------------
Unknown event ids and connection indices surface as 404 (``LookupError``),
bad timeline indices as 400 (``ValueError``); see ``app.py``.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from hypewaves.api.board_store import get_board_store
from hypewaves.api.schemas import (
    BoardOut,
    CommitRequest,
    ConnectionOut,
    CursorRequest,
    DeletedEventOut,
    DraftOut,
    GestureRequest,
    RenderOut,
    SelectionOut,
    SelectionRequest,
    board_out,
    connection_out,
    draft_out,
    render_out,
    selection_out,
)
from hypewaves.core.contracts.geometry import Point
from hypewaves.core.contracts.timeline import Event, EventSubmission

router = APIRouter(tags=["Board"])


@router.get("/board", response_model=BoardOut, summary="Visible timelines and layout")
async def get_board() -> BoardOut:
    board = get_board_store().board
    frame = board.render()
    return board_out(frame, board.selection, len(board.connections))


@router.put("/selection", response_model=SelectionOut, summary="Replace the view state")
async def put_selection(request: SelectionRequest) -> SelectionOut:
    board = get_board_store().board
    return selection_out(board.set_selection(request.wave_indices, request.show_predicted))


@router.post(
    "/selection/waves/{index}/toggle",
    response_model=SelectionOut,
    summary="Show or hide one wave",
)
async def toggle_wave(index: int) -> SelectionOut:
    return selection_out(get_board_store().board.toggle_wave(index))


@router.post(
    "/events",
    response_model=Event,
    status_code=status.HTTP_201_CREATED,
    summary="Add an event to a wave",
)
async def create_event(submission: EventSubmission) -> Event:
    """
    Append an event built from the creation dialog's record.

    The server assigns the id; the client's ``timelineIndex`` picks the wave.
    """
    return get_board_store().board.add_event(submission)


@router.delete(
    "/events/{event_id}",
    response_model=DeletedEventOut,
    summary="Delete an event and its connections",
)
async def delete_event(event_id: str) -> DeletedEventOut:
    removed = get_board_store().board.delete_event(event_id)
    return DeletedEventOut(event_id=event_id, connections_removed=removed)


@router.post("/gestures/start", response_model=DraftOut, summary="Connect gesture on an event")
async def start_gesture(request: GestureRequest) -> DraftOut:
    """
    Start, retarget or cancel the draft depending on its current state.

    - Idle: the event becomes the draft's start.
    - Pending on the same event: the draft is cancelled.
    - Pending on another event: the draft waits for a reason.
    """
    return draft_out(get_board_store().board.start_gesture(request.event_id, request.cursor()))


@router.post("/gestures/move", response_model=DraftOut, summary="Move the live line's end")
async def move_cursor(request: CursorRequest) -> DraftOut:
    return draft_out(get_board_store().board.cursor_move(Point(x=request.x, y=request.y)))


@router.get("/draft", response_model=DraftOut, summary="Current draft state")
async def get_draft() -> DraftOut:
    return draft_out(get_board_store().board.draft)


@router.post(
    "/draft/commit",
    response_model=ConnectionOut,
    status_code=status.HTTP_201_CREATED,
    summary="Confirm the draft with a reason",
)
async def commit_draft(request: CommitRequest) -> ConnectionOut:
    board = get_board_store().board
    conn = board.commit(request.reason)
    if conn is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No connection is awaiting a reason",
        )
    return connection_out(len(board.connections) - 1, conn)


@router.post("/draft/cancel", response_model=DraftOut, summary="Discard the draft")
async def cancel_draft() -> DraftOut:
    board = get_board_store().board
    board.cancel()
    return draft_out(board.draft)


@router.get("/connections", response_model=list[ConnectionOut], summary="All confirmed connections")
async def list_connections() -> list[ConnectionOut]:
    board = get_board_store().board
    return [connection_out(i, c) for i, c in enumerate(board.connections)]


@router.delete(
    "/connections/{index}",
    response_model=ConnectionOut,
    summary="Delete one confirmed connection",
)
async def delete_connection(index: int) -> ConnectionOut:
    conn = get_board_store().board.delete_connection(index)
    return connection_out(index, conn)


@router.get("/render", response_model=RenderOut, summary="Drawable connections and live line")
async def render() -> RenderOut:
    return render_out(get_board_store().board.render())


@router.post("/board/save", summary="Write the dataset back to disk")
async def save_board() -> dict[str, str]:
    return {"path": str(get_board_store().save())}


__all__ = ["router"]
