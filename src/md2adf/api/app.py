"""FastAPI application exposing the converter as a local JSON API."""

import dataclasses
import logging
import secrets
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from .. import __version__
from ..body import InvalidBodyError, coerce_body
from ..convert.mentions import collect_mentions
from ..converter import convert_markdown
from ..detect import looks_like_markdown

logger = logging.getLogger(__name__)


class ConvertRequest(BaseModel):
    markdown: str = Field(..., description="Markdown text, may contain @[id:name] mentions")
    detect: bool | None = Field(None, description="Wrap non-Markdown text as a plain paragraph")
    mentions: bool | None = Field(None, description="Splice mentions into mention nodes")


class TextRequest(BaseModel):
    text: str


class BodyRequest(BaseModel):
    body: str | dict[str, Any] = Field(..., description="Plain text, Markdown, ADF JSON or ADF object")


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance with lexer and default options
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="md2adf API",
        description="Markdown to Atlassian Document Format conversion",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or credentials.credentials != token:
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    @app.get("/health")  # type: ignore[misc]
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.post("/convert")  # type: ignore[misc]
    async def convert(req: ConvertRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Convert Markdown to an ADF document."""
        options = runtime.options
        if req.detect is not None:
            options = dataclasses.replace(options, detect=req.detect)
        if req.mentions is not None:
            options = dataclasses.replace(options, mentions=req.mentions)
        return convert_markdown(req.markdown, options=options, lexer=runtime.lexer).to_dict()

    @app.post("/detect")  # type: ignore[misc]
    async def detect(req: TextRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Report whether text looks like Markdown."""
        return {"markdown": looks_like_markdown(req.text)}

    @app.post("/body")  # type: ignore[misc]
    async def body(req: BodyRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Coerce an issue/comment body into an ADF document."""
        try:
            return coerce_body(req.body, options=runtime.options, lexer=runtime.lexer)
        except InvalidBodyError as e:
            logger.info("rejected body: %s", e)
            raise HTTPException(status_code=422, detail=str(e)) from e

    @app.post("/mentions")  # type: ignore[misc]
    async def mentions(req: TextRequest, auth: None = Depends(verify_token)) -> list[dict[str, Any]]:
        """List mentions found outside code."""
        options = dataclasses.replace(runtime.options, mentions=True, detect=False)
        doc = convert_markdown(req.text, options=options, lexer=runtime.lexer)
        return [{"id": m.id, "text": m.text} for m in collect_mentions(doc)]

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
