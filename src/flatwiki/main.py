"""FlatWiki FastAPI application."""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
import uvicorn

from flatwiki.config import Settings, settings as default_settings
from flatwiki.core.errors import InvalidTitleError, StorageError
from flatwiki.core.models import Page, is_valid_title
from flatwiki.core.routing import resolve
from flatwiki.core.storage import FileStorage, Storage

logger = logging.getLogger(__name__)

templates_path = Path(__file__).parent / "templates"
static_path = Path(__file__).parent / "static"

router = APIRouter()


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ========== Dependencies ==========


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


def page_title(request: Request) -> str:
    """Resolve the request path and return its title, or 404."""
    route = resolve(request.url.path)
    if route is None or route.title is None:
        raise HTTPException(status_code=404, detail="Not Found")
    return route.title


def render(
    request: Request, templates: Jinja2Templates, name: str, **kwargs
) -> HTMLResponse:
    """Render a template with the base context."""
    context = {"app_title": request.app.state.settings.app_title, **kwargs}
    return templates.TemplateResponse(request, name, context)


# ========== Pages ==========


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    storage: Storage = Depends(get_storage),
    templates: Jinja2Templates = Depends(get_templates),
):
    """Home page - list all pages."""
    # StorageError propagates to the 500 handler; an unreadable data
    # directory is never shown as an empty wiki.
    pages = storage.list_pages_with_content()
    return render(request, templates, "page/list.html", pages=pages)


@router.get("/create", response_class=HTMLResponse)
def create_page(
    request: Request, templates: Jinja2Templates = Depends(get_templates)
):
    """Blank creation form."""
    return render(request, templates, "page/create.html")


@router.api_route("/store", methods=["GET", "POST"])
def store_page(
    title: str = Form(""),
    body: str = Form(""),
    storage: Storage = Depends(get_storage),
):
    """Create or overwrite a page from the creation form."""
    if not is_valid_title(title):
        raise InvalidTitleError(title)
    page = storage.save_page(title, body.encode("utf-8"))
    logger.info("Stored page %r (%d bytes)", title, len(page.body))
    return RedirectResponse(url=f"/view/{title}", status_code=302)


@router.get("/view/{title}", response_class=HTMLResponse)
def view_page(
    request: Request,
    title: str = Depends(page_title),
    storage: Storage = Depends(get_storage),
    templates: Jinja2Templates = Depends(get_templates),
):
    """View a wiki page."""
    page = storage.get_page(title)

    if page is None:
        # Page doesn't exist - redirect to edit to create it
        return RedirectResponse(url=f"/edit/{title}", status_code=302)

    return render(request, templates, "page/view.html", page=page)


@router.get("/edit/{title}", response_class=HTMLResponse)
def edit_page(
    request: Request,
    title: str = Depends(page_title),
    storage: Storage = Depends(get_storage),
    templates: Jinja2Templates = Depends(get_templates),
):
    """Edit page form."""
    page = storage.get_page(title)

    if page is None:
        # New page
        page = Page(title=title, body=b"", exists=False)

    return render(request, templates, "page/edit.html", page=page)


@router.api_route("/save/{title}", methods=["GET", "POST"])
def save_page(
    title: str = Depends(page_title),
    body: str = Form(""),
    storage: Storage = Depends(get_storage),
):
    """Save page content."""
    page = storage.save_page(title, body.encode("utf-8"))
    logger.info("Saved page %r (%d bytes)", title, len(page.body))
    return RedirectResponse(url=f"/view/{title}", status_code=302)


@router.api_route("/delete/{title}", methods=["GET", "POST"])
def delete_page(
    title: str = Depends(page_title),
    storage: Storage = Depends(get_storage),
):
    """Delete a page.

    The page is loaded first; a missing page is an error, not a no-op.
    """
    page = storage.get_page(title)
    if page is None:
        raise HTTPException(
            status_code=500, detail=f"Page {title!r} does not exist"
        )
    if not storage.delete_page(page.title):
        raise HTTPException(
            status_code=500, detail=f"Page {title!r} vanished before delete"
        )
    logger.info("Deleted page %r", title)
    return RedirectResponse(url="/", status_code=302)


# ========== Error handlers ==========


async def handle_storage_error(request: Request, exc: StorageError):
    logger.error(
        "Storage error on %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
        exc_info=exc,
    )
    return PlainTextResponse(exc.message, status_code=500)


async def handle_invalid_title(request: Request, exc: InvalidTitleError):
    logger.warning("Rejected title %r on %s", exc.title, request.url.path)
    return PlainTextResponse("Not Found", status_code=404)


# ========== Application ==========


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: log where pages are kept."""
    logger.info(
        "%s serving pages from %s",
        app.state.settings.app_title,
        app.state.settings.data_dir.resolve(),
    )
    yield
    logger.info("%s shutting down", app.state.settings.app_title)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Storage, templates and settings are created once here and shared with
    every request through ``app.state``.
    """
    if settings is None:
        settings = default_settings

    app = FastAPI(
        title=settings.app_title,
        debug=settings.debug,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.storage = FileStorage(settings.data_dir, create=settings.create_data_dir)
    app.state.templates = Jinja2Templates(directory=str(templates_path))

    app.mount("/public", StaticFiles(directory=str(static_path)), name="public")
    app.include_router(router)
    app.add_exception_handler(StorageError, handle_storage_error)
    app.add_exception_handler(InvalidTitleError, handle_invalid_title)
    return app


def run() -> None:
    """Serve the wiki with uvicorn."""
    setup_logging(default_settings.log_level)
    uvicorn.run(
        "flatwiki.main:create_app",
        factory=True,
        host=default_settings.host,
        port=default_settings.port,
        log_config=None,
    )
