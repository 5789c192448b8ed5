"""FastAPI REST API for constref."""

import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .dependencies import scan_dependencies
from .errors import (
    AutoloadRootNotFoundError,
    ConfigError,
    ConstrefError,
    InvalidProjectPathError,
    NamespaceCollisionError,
    UnsupportedLanguageError,
)
from .extractor import Extractor
from .models import Reference

# Project served by the API; set by `constref serve`
PROJECT_ROOT_ENV_VAR = "CONSTREF_PROJECT_ROOT"


# --- Pydantic Schemas ---


class SpanSchema(BaseModel):
    start_line: int
    start_column: int
    end_line: int
    end_column: int


class ConstantSchema(BaseModel):
    name: str  # "Billing::Invoice"
    location: Optional[str] = None  # "app/models/billing/invoice.rb"


class ReferenceSchema(BaseModel):
    file_path: str
    span: SpanSchema
    constant: ConstantSchema


class ReferenceListResponse(BaseModel):
    references: list[ReferenceSchema]
    count: int


class SnippetRequest(BaseModel):
    source: str = Field(..., description="Ruby code to analyze")


class FileRequest(BaseModel):
    path: str = Field(..., description="File path relative to the project root")


class AutoloadRootSchema(BaseModel):
    path: str
    namespace: Optional[str] = None


class NamespaceSchema(BaseModel):
    name: str
    defining_file: Optional[str] = None
    directories: list[str]


class NamespaceListResponse(BaseModel):
    roots: list[AutoloadRootSchema]
    namespaces: list[NamespaceSchema]
    count: int


class DependencyEdgeSchema(BaseModel):
    source_file: str
    target_file: str
    constants: list[str]
    count: int


class DependencyListResponse(BaseModel):
    edges: list[DependencyEdgeSchema]
    count: int


class ErrorResponse(BaseModel):
    detail: str
    error_type: str


# --- Helper Functions ---

_extractor_cache: dict[Path, Extractor] = {}


def get_project_root() -> Path:
    return Path(os.environ.get(PROJECT_ROOT_ENV_VAR, os.getcwd())).resolve()


def get_extractor() -> Extractor:
    """Get the Extractor for the served project, building its index once."""
    root = get_project_root()
    if root not in _extractor_cache:
        _extractor_cache[root] = Extractor.from_project(root)
    return _extractor_cache[root]


def references_to_response(references: list[Reference]) -> ReferenceListResponse:
    return ReferenceListResponse(
        references=[ReferenceSchema(**ref.to_dict()) for ref in references],
        count=len(references),
    )


# --- App ---

app = FastAPI(
    title="constref API",
    description="Resolve Ruby constant references to the project files that define them",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Exception Handlers ---

ERROR_STATUS_CODES = {
    UnsupportedLanguageError: 400,
    InvalidProjectPathError: 500,
    AutoloadRootNotFoundError: 500,
    NamespaceCollisionError: 500,
    ConfigError: 500,
}


@app.exception_handler(ConstrefError)
async def constref_error_handler(request: Request, exc: ConstrefError) -> JSONResponse:
    """Map ConstrefError subclasses to appropriate HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


# --- Endpoints ---


@app.get("/api/health")
def health_check():
    """
    Health check endpoint.

    Reports whether the served project's namespace index can be built.
    """
    try:
        extractor = get_extractor()
        return {
            "status": "ok",
            "project_root": str(extractor.root_path),
            "namespace_count": len(extractor.index),
        }
    except ConstrefError as e:
        return {
            "status": "error",
            "project_root": str(get_project_root()),
            "detail": str(e),
        }


@app.get("/api/namespaces", response_model=NamespaceListResponse)
def list_namespaces():
    """List autoload roots and every known namespace path."""
    index = get_extractor().index
    entries = index.entries()
    return NamespaceListResponse(
        roots=[AutoloadRootSchema(**r.to_dict()) for r in index.roots],
        namespaces=[NamespaceSchema(**e.to_dict()) for e in entries],
        count=len(entries),
    )


@app.post("/api/references/snippet", response_model=ReferenceListResponse)
def references_from_snippet(request: SnippetRequest):
    """Extract references from a code string."""
    return references_to_response(get_extractor().references_from_string(request.source))


@app.post("/api/references/file", response_model=ReferenceListResponse)
def references_from_file(request: FileRequest):
    """Extract references from a project file."""
    return references_to_response(get_extractor().references_from_file(request.path))


@app.get("/api/dependencies", response_model=DependencyListResponse)
def list_dependencies():
    """File-to-file dependency edges for the whole project."""
    edges = scan_dependencies(get_extractor())
    return DependencyListResponse(
        edges=[DependencyEdgeSchema(**e.to_dict()) for e in edges],
        count=len(edges),
    )
