"""
ToDo API Routes.

Validates requests, delegates persistence to the ToDo repository and maps
outcomes to status codes. Repository failures surface as 400/404, never 5xx.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from core.logger import logger
from internal.api.dependencies import get_todo_repository
from internal.api.schemas.todo_schemas import ToDoCreateRequest, ToDoUpdateRequest
from internal.api.utils import bad_request, not_found, serialize_todo, success_response
from repositories import IRepository, ToDo
from services.todo_queries import (
    IncomingWindow,
    build_incoming_filter,
    build_search_filter,
)

router = APIRouter(prefix="/api/ToDo", tags=["ToDo"])

INVALID_ID = "Invalid ID provided."
NOT_FOUND = "ToDo item not found."


@router.get(
    "/getAll",
    summary="List ToDo Items",
    description="Return every ToDo item",
    responses={204: {"description": "No list available"}},
)
async def get_all(repository: IRepository[ToDo] = Depends(get_todo_repository)):
    """
    List all ToDo items.

    An empty store returns 200 with an empty list.
    """
    logger.info("API: List all ToDo items")

    todos = await repository.list_all()
    if todos is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    logger.info(f"API: Listed {len(todos)} ToDo items")
    return success_response(
        message="ToDo items retrieved",
        data=[serialize_todo(todo) for todo in todos],
    )


@router.get(
    "/getById{todo_id}",
    summary="Get ToDo Item",
    description="Fetch a ToDo item by id",
    responses={
        400: {"description": "Invalid id"},
        404: {"description": "ToDo item not found (empty body)"},
    },
)
async def get_todo_by_id(
    todo_id: int, repository: IRepository[ToDo] = Depends(get_todo_repository)
):
    logger.info(f"API: Get ToDo item: id={todo_id}")

    if todo_id <= 0:
        return bad_request(INVALID_ID)

    todo = await repository.get_by_id(todo_id)
    if todo is None:
        logger.warning(f"API: ToDo item not found: id={todo_id}")
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return success_response(message="ToDo item retrieved", data=serialize_todo(todo))


@router.get(
    "/search",
    summary="Search ToDo Items",
    description="Substring search on title and/or description",
    responses={
        400: {"description": "Neither search parameter provided"},
        404: {"description": "No items match"},
    },
)
async def search(
    title_name: Optional[str] = Query(default=None, alias="titleName"),
    description: Optional[str] = Query(default=None),
    repository: IRepository[ToDo] = Depends(get_todo_repository),
):
    """
    Search ToDo items.

    **Query Parameters:**
    - **titleName**: Substring of the title
    - **description**: Substring of the description

    Both supplied parameters must match.
    """
    logger.info(f"API: Search ToDo items: titleName={title_name!r}, description={description!r}")

    try:
        spec = build_search_filter(title_name, description)
    except ValueError:
        return bad_request(
            "At least one search parameter (titleName or description) must be provided."
        )

    todos = await repository.get_all_where(spec)
    if not todos:
        return not_found("No items match the search criteria.")

    return success_response(
        message="ToDo items retrieved",
        data=[serialize_todo(todo) for todo in todos],
    )


@router.get(
    "/incoming",
    summary="Incoming ToDo Items",
    description="ToDo items expiring today, tomorrow or within the week",
    responses={
        400: {"description": "Empty filter"},
        404: {"description": "No items match the filter"},
    },
)
async def get_incoming(
    filter_name: Optional[str] = Query(default="today", alias="filter"),
    repository: IRepository[ToDo] = Depends(get_todo_repository),
):
    """
    List ToDo items by expiry window.

    **Filter values** (case-insensitive):
    - **today**: expiring on the current UTC date
    - **nextday**: expiring on the next UTC date
    - **week**: expiring from today through today + 7 days
    """
    logger.info(f"API: Incoming ToDo items: filter={filter_name!r}")

    if filter_name is None or not filter_name.strip():
        return bad_request("Filter cannot be empty.")

    window = IncomingWindow.parse(filter_name)
    todos = None
    if window is not None:
        todos = await repository.get_all_where(build_incoming_filter(window))
    else:
        logger.warning(f"API: Unknown incoming filter: {filter_name!r}")

    if not todos:
        return not_found("No ToDos match the specified filter.")

    return success_response(
        message="ToDo items retrieved",
        data=[serialize_todo(todo) for todo in todos],
    )


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    summary="Create ToDo Item",
    description="Create a ToDo item; progress starts at 0 and not done",
    responses={
        201: {"description": "ToDo item created"},
        400: {"description": "Invalid payload or the item could not be stored"},
    },
)
async def create(
    payload: ToDoCreateRequest,
    request: Request,
    repository: IRepository[ToDo] = Depends(get_todo_repository),
):
    logger.info(f"API: Create ToDo item: title={payload.title!r}")

    todo = ToDo(
        title=payload.title,
        description=payload.description,
        expiry_date=payload.expiry_date,
        is_done=False,
        percent_complete=0,
    )

    result = await repository.add(todo)
    if not result:
        logger.error(f"❌ API: Failed to create ToDo item: {result.error_kind}")
        return bad_request("Failed to create the ToDo item.", result)

    location = str(request.url_for("get_todo_by_id", todo_id=todo.id))
    logger.info(f"API: ToDo item created: id={todo.id}")
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=success_response(message="ToDo item created", data=serialize_todo(todo)),
        headers={"Location": location},
    )


@router.post(
    "/markAsComplete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Mark ToDo Item Complete",
    responses={400: {"description": "Invalid id or update failed"}, 404: {"description": "Not found"}},
)
async def mark_as_complete(
    todo_id: int = Query(..., alias="id"),
    repository: IRepository[ToDo] = Depends(get_todo_repository),
):
    logger.info(f"API: Mark ToDo item complete: id={todo_id}")

    if todo_id <= 0:
        return bad_request(INVALID_ID)

    todo = await repository.get_by_id(todo_id)
    if todo is None:
        return not_found(NOT_FOUND)

    todo.percent_complete = 100
    todo.is_done = True

    result = await repository.update(todo)
    if not result:
        return bad_request("Failed to mark the ToDo item as complete.", result)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/update{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update ToDo Item",
    description="Replace title, description and expiry date",
    responses={400: {"description": "Invalid input or update failed"}, 404: {"description": "Not found"}},
)
async def update(
    todo_id: int,
    payload: Optional[ToDoUpdateRequest] = Body(default=None),
    repository: IRepository[ToDo] = Depends(get_todo_repository),
):
    logger.info(f"API: Update ToDo item: id={todo_id}")

    if todo_id <= 0 or payload is None:
        return bad_request("Invalid ID or update data provided.")

    todo = await repository.get_by_id(todo_id)
    if todo is None:
        return not_found(NOT_FOUND)

    # Progress fields are left as they are
    todo.title = payload.title
    todo.description = payload.description
    todo.expiry_date = payload.expiry_date

    result = await repository.update(todo)
    if not result:
        return bad_request("Failed to update the ToDo item.", result)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/setPercentComplete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Set ToDo Progress",
    description="Set percent complete; 100 also marks the item done",
    responses={400: {"description": "Invalid input or update failed"}, 404: {"description": "Not found"}},
)
async def set_percent_complete(
    todo_id: int = Query(..., alias="id"),
    percent_complete: int = Query(..., alias="percentComplete"),
    repository: IRepository[ToDo] = Depends(get_todo_repository),
):
    """
    Set the completion percentage.

    Lowering the percentage never clears the done flag.
    """
    logger.info(f"API: Set ToDo progress: id={todo_id}, percentComplete={percent_complete}")

    if todo_id <= 0 or percent_complete < 0 or percent_complete > 100:
        return bad_request("Invalid ID or percentage value provided.")

    todo = await repository.get_by_id(todo_id)
    if todo is None:
        return not_found(NOT_FOUND)

    todo.percent_complete = percent_complete
    if percent_complete == 100:
        todo.is_done = True

    result = await repository.update(todo)
    if not result:
        return bad_request("Failed to update the percentage of the ToDo item.", result)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/Delete{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete ToDo Item",
    responses={400: {"description": "Invalid id or delete failed"}, 404: {"description": "Not found"}},
)
async def delete(
    todo_id: int, repository: IRepository[ToDo] = Depends(get_todo_repository)
):
    logger.info(f"API: Delete ToDo item: id={todo_id}")

    if todo_id <= 0:
        return bad_request(INVALID_ID)

    todo = await repository.get_by_id(todo_id)
    if todo is None:
        return not_found(NOT_FOUND)

    result = await repository.remove(todo)
    if not result:
        return bad_request("Failed to delete the ToDo item.", result)

    logger.info(f"API: ToDo item deleted: id={todo_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def create_todo_routes() -> APIRouter:
    """
    Factory function to create ToDo routes.

    Returns:
        APIRouter: Configured router with ToDo endpoints
    """
    return router
