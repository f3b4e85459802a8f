"""FastAPI routes for highlighting, extraction and background scans."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from code_snippets.config import load_settings
from code_snippets.extractor import extract_functions
from code_snippets.highlight import Highlighter, TagBuffer, render_html
from code_snippets.languages import default_registry
from code_snippets.scanner import EXT_TO_LANGUAGE, ScanTask, detect_language
from code_snippets.web.state import state

router = APIRouter(prefix="/api")


# --- Request models ---

class HighlightRequest(BaseModel):
    text: str
    language: str | None = None


class FunctionsRequest(BaseModel):
    content: str
    language: str | None = None
    file_name: str = "snippet"
    project_name: str | None = None


class ScanRequest(BaseModel):
    path: str
    project_name: str | None = None


# --- Helpers ---

def _validate_dir(p: str) -> Path:
    resolved = Path(p).expanduser().resolve()
    if not resolved.exists():
        raise HTTPException(404, f"Path not found: {resolved}")
    if not resolved.is_dir():
        raise HTTPException(400, "Path must be a directory")
    return resolved


def _scan_summary(task: ScanTask) -> dict:
    return {
        "scan_id": task.id,
        "source_dir": str(task.config.source_dir),
        "project_name": task.project_name,
        "status": task.status().value,
        "files_done": task.files_done,
        "timestamp": task.timestamp,
    }


# --- Endpoints ---

@router.get("/languages")
async def list_languages():
    by_lang: dict[str, list[str]] = {}
    for ext, key in EXT_TO_LANGUAGE.items():
        by_lang.setdefault(key, []).append(ext)
    registry = default_registry()
    return {
        "default": registry.default.key,
        "languages": [
            {
                "key": rule.key,
                "aliases": list(rule.aliases),
                "extensions": by_lang.get(rule.key, []),
                "tags": list(rule.tags),
                "extracts_functions": rule.function_regex is not None,
            }
            for rule in registry
        ],
    }


@router.post("/highlight")
async def highlight(req: HighlightRequest):
    highlighter = Highlighter()
    language = req.language or load_settings().default_language
    rule = highlighter.registry.resolve(language)
    buffer = TagBuffer.for_text(req.text)
    spans = highlighter.highlight(buffer, req.text, rule.key)
    return {
        "language": rule.key,
        "spans": [{"start": s.start, "end": s.end, "tag": s.tag} for s in spans],
        "runs": [{"start": a, "end": b, "tag": t} for a, b, t in buffer.runs()],
        "html": render_html(req.text, spans),
    }


@router.post("/functions")
async def functions(req: FunctionsRequest):
    language = req.language or detect_language(req.file_name)
    found = extract_functions(req.content, language, Path(req.file_name), req.project_name)
    return {
        "language": language,
        "count": len(found),
        "functions": [fn.to_dict() for fn in found],
    }


@router.post("/scan")
async def start_scan(req: ScanRequest):
    source = _validate_dir(req.path)
    config = load_settings().scan_config(source, req.project_name)
    task = ScanTask(config).start()
    state.add_scan(task)
    return _scan_summary(task)


@router.get("/scans")
async def list_scans():
    return {"scans": [_scan_summary(t) for t in state.list_scans()]}


@router.get("/scan/{scan_id}")
async def scan_status(scan_id: str):
    task = state.get_scan(scan_id)
    if not task:
        raise HTTPException(404, "Scan not found")
    found = task.functions()
    return {
        **_scan_summary(task),
        "error": task.error,
        "count": len(found),
        "functions": [fn.to_dict() for fn in found],
        "skipped": [{"path": str(s.path), "reason": s.reason} for s in task.skipped()],
    }


@router.delete("/scan/{scan_id}")
async def delete_scan(scan_id: str):
    """Cancel a scan and drop its results."""
    if not state.delete_scan(scan_id):
        raise HTTPException(404, "Scan not found")
    return {"deleted": scan_id}
