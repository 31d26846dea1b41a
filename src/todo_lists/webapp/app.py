"""
FastAPI Web Application for Todo Lists
Session-backed list and todo management
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, Form, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, RedirectResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware

from todo_lists import __version__
from todo_lists.config import ConfigModel, get_config
from todo_lists.domain import ErrorKind, TodoList, not_found_message
from todo_lists.store import ListStore, remaining_count, sort_lists, sort_todos, todos_count

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

WEBAPP_DIR = Path(__file__).parent

# Templates
templates = Jinja2Templates(directory=str(WEBAPP_DIR / "templates"))


def list_class(todo_list: TodoList) -> str:
    """CSS class for a list row"""
    return "complete" if todo_list.is_complete() else ""


templates.env.globals.update(
    list_class=list_class,
    todos_count=todos_count,
    remaining_count=remaining_count,
    sort_todos=sort_todos,
)


# ============================================================================
# Helpers
# ============================================================================

def get_store(request: Request) -> ListStore:
    """Store bound to this request's session"""
    return ListStore(request.session)


def flash(request: Request, kind: str, message: str):
    """Queue a one-time message for the next rendered page"""
    request.session[kind] = message


def render(request: Request, name: str, status_code: int = status.HTTP_200_OK, **context) -> HTMLResponse:
    """Render a template, consuming any pending flash messages"""
    context.update({
        "success": request.session.pop("success", None),
        "error": request.session.pop("error", None),
    })
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def is_xhr(request: Request) -> bool:
    return request.headers.get("x-requested-with") == "XMLHttpRequest"


def not_found(request: Request, entity: str = "list") -> RedirectResponse:
    """Flash the not-found message and send the user back to all lists"""
    flash(request, "error", not_found_message(entity))
    return redirect("/lists")


def todo_not_found(request: Request, store: ListStore, list_id: int) -> RedirectResponse:
    """Not-found response for todo routes; names whichever lookup failed"""
    entity = "todo" if store.lookup_list(list_id).ok else "list"
    return not_found(request, entity)


# ============================================================================
# Application
# ============================================================================

def create_app(config: Optional[ConfigModel] = None) -> FastAPI:
    """Build the web application.

    Args:
        config: Settings to use; the cached configuration when omitted

    Returns:
        Configured FastAPI application
    """
    config = config or get_config()
    logging.getLogger().setLevel(config.log_level)

    app = FastAPI(
        title="Todo Lists",
        description="Session-backed list and todo management",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Session middleware holds the lists and the flash messages
    app.add_middleware(
        SessionMiddleware,
        secret_key=config.session_secret,
        session_cookie=config.session_cookie,
        max_age=config.session_max_age,
        same_site="lax",
    )

    # Mount static files
    app.mount("/static", StaticFiles(directory=str(WEBAPP_DIR / "static")), name="static")

    register_routes(app)
    register_error_handlers(app)

    logger.info("Todo Lists app created (debug=%s)", config.debug)
    return app


def register_routes(app: FastAPI):
    """Attach the list and todo routes"""

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "todo-lists",
            "version": __version__,
        }

    @app.get("/")
    async def index():
        """Root redirect to all lists"""
        return redirect("/lists")

    # ------------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------------

    @app.get("/lists", response_class=HTMLResponse)
    async def all_lists(request: Request):
        """All lists, incomplete first"""
        store = get_store(request)
        return render(request, "lists.html", lists=sort_lists(store.lists))

    @app.get("/lists/new", response_class=HTMLResponse)
    async def new_list(request: Request):
        """New list form"""
        get_store(request)
        return render(request, "new_list.html", list_name="")

    @app.post("/lists")
    async def create_list(request: Request, list_name: str = Form("")):
        """Create a new list"""
        store = get_store(request)
        result = store.create_list(list_name)

        if not result.ok:
            flash(request, "error", result.message)
            return render(
                request,
                "new_list.html",
                status_code=status.HTTP_400_BAD_REQUEST,
                list_name=list_name,
            )

        flash(request, "success", "The list has been created.")
        return redirect("/lists")

    @app.get("/lists/{list_id}", response_class=HTMLResponse)
    async def show_list(request: Request, list_id: int):
        """One list with its todos"""
        store = get_store(request)
        found = store.lookup_list(list_id)
        if not found.ok:
            return not_found(request)

        return render(request, "list.html", todo_list=found.value, todo_name="")

    @app.get("/lists/{list_id}/edit", response_class=HTMLResponse)
    async def edit_list(request: Request, list_id: int):
        """Rename form"""
        store = get_store(request)
        found = store.lookup_list(list_id)
        if not found.ok:
            return not_found(request)

        return render(request, "edit_list.html", todo_list=found.value, list_name=found.value.name)

    @app.post("/lists/{list_id}")
    async def update_list(request: Request, list_id: int, list_name: str = Form("")):
        """Rename a list"""
        store = get_store(request)
        result = store.rename_list(list_id, list_name)

        if result.error is ErrorKind.NOT_FOUND:
            return not_found(request)
        if not result.ok:
            flash(request, "error", result.message)
            return render(
                request,
                "edit_list.html",
                status_code=status.HTTP_400_BAD_REQUEST,
                todo_list=store.lookup_list(list_id).value,
                list_name=list_name,
            )

        flash(request, "success", "The list has been updated.")
        return redirect(f"/lists/{list_id}")

    @app.post("/lists/{list_id}/delete")
    async def delete_list(request: Request, list_id: int):
        """Delete a list"""
        store = get_store(request)
        result = store.delete_list(list_id)
        if not result.ok:
            return not_found(request)

        flash(request, "success", "The list has been deleted.")
        if is_xhr(request):
            return PlainTextResponse("/lists")

        return redirect("/lists")

    # ------------------------------------------------------------------------
    # Todos
    # ------------------------------------------------------------------------

    @app.post("/lists/{list_id}/add_todo")
    async def add_todo(request: Request, list_id: int, todo_name: str = Form("")):
        """Add a todo to a list"""
        store = get_store(request)
        result = store.add_todo(list_id, todo_name)

        if result.error is ErrorKind.NOT_FOUND:
            return not_found(request)
        if not result.ok:
            flash(request, "error", result.message)
            return render(
                request,
                "list.html",
                status_code=status.HTTP_400_BAD_REQUEST,
                todo_list=store.lookup_list(list_id).value,
                todo_name=todo_name,
            )

        flash(request, "success", "The todo was added.")
        return redirect(f"/lists/{list_id}")

    @app.post("/lists/{list_id}/todo/{todo_id}/delete")
    async def delete_todo(request: Request, list_id: int, todo_id: int):
        """Delete a todo"""
        store = get_store(request)
        result = store.delete_todo(list_id, todo_id)
        if not result.ok:
            return todo_not_found(request, store, list_id)

        flash(request, "success", "The todo has been deleted.")
        if is_xhr(request):
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        return redirect(f"/lists/{list_id}")

    @app.post("/lists/{list_id}/todo/{todo_id}")
    async def update_todo(
        request: Request,
        list_id: int,
        todo_id: int,
        completed: str = Form("false"),
    ):
        """Mark a todo complete or incomplete"""
        store = get_store(request)
        result = store.set_todo_completion(list_id, todo_id, completed == "true")
        if not result.ok:
            return todo_not_found(request, store, list_id)

        flash(request, "success", "The todo has been updated.")
        return redirect(f"/lists/{list_id}")

    @app.post("/lists/{list_id}/complete_all")
    async def complete_all(request: Request, list_id: int):
        """Mark every todo in a list complete"""
        store = get_store(request)
        result = store.complete_all_todos(list_id)
        if not result.ok:
            return not_found(request)

        flash(request, "success", "All todos have been completed.")
        return redirect(f"/lists/{list_id}")


def register_error_handlers(app: FastAPI):
    """Render HTML error pages"""

    @app.exception_handler(RequestValidationError)
    async def invalid_id_handler(request: Request, exc: RequestValidationError):
        """Ids that are not integers match nothing"""
        fields = {str(error["loc"][-1]) for error in exc.errors() if error.get("loc")}
        return not_found(request, "todo" if "todo_id" in fields else "list")

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc):
        """404 error handler"""
        return templates.TemplateResponse(
            request,
            "error.html",
            {"error_code": 404, "error_message": "Page not found"},
            status_code=404,
        )

    @app.exception_handler(500)
    async def server_error_handler(request: Request, exc: Exception):
        """500 error handler"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return templates.TemplateResponse(
            request,
            "error.html",
            {"error_code": 500, "error_message": "Internal server error"},
            status_code=500,
        )
