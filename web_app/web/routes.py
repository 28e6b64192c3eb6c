"""Web interface routes implementation."""

import logging

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from jinja2 import TemplateNotFound

from urlshortener.exceptions import URLShortenerError

router = APIRouter()

logger = logging.getLogger("url_shortener.web")


def render_page(request: Request, name: str, context: dict, status_code: int = 200) -> HTMLResponse:
    """Render a template, falling back to bare HTML when it is missing."""
    templates = request.app.state.templates
    try:
        return templates.TemplateResponse(request, name, context, status_code=status_code)
    except TemplateNotFound:
        logger.error(f"Template {name} not found in {request.app.state.config.templates_dir}")
        if "Error" in context:
            body = f"<h1>Error {status_code}</h1><p>{context['Error']}</p><a href='/'>Go back</a>"
        elif context.get("ShortURL"):
            body = f"<h1>Success!</h1><p>Short URL: <a href='{context['ShortURL']}'>{context['ShortURL']}</a></p>"
        else:
            body = "<h1>URL Shortener</h1>"
        return HTMLResponse(content=body, status_code=status_code)


def render_error(request: Request, message: str, status_code: int) -> HTMLResponse:
    """Render the error page with a message."""
    return render_page(
        request,
        "error.html",
        {"Error": message, "StatusCode": status_code},
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the homepage."""
    return render_page(request, "index.html", {})


@router.post("/shorten", response_class=HTMLResponse, include_in_schema=False)
async def shorten_url_web(request: Request, url: str = Form("")):
    """Handle form submission to create a short URL."""
    service = request.app.state.service
    config = request.app.state.config

    try:
        short_code = await service.shorten(url)
    except URLShortenerError as e:
        if e.status_code >= 500:
            logger.error(f"Failed to shorten {url}: {e}")
        return render_error(request, str(e), e.status_code)

    return render_page(
        request,
        "index.html",
        {"ShortURL": config.short_url(short_code), "OriginalURL": url},
    )


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    try:
        original_url = await service.resolve(short_code)
    except URLShortenerError as e:
        if e.status_code >= 500:
            logger.error(f"Failed to resolve {short_code}: {e}")
            return render_error(request, str(e), e.status_code)
        return render_error(request, "Short code not found", status.HTTP_404_NOT_FOUND)

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
