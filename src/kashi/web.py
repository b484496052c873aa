from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from .core import CONVERSION_MODES, ConverterConfig, convert_lyrics, line_payload
from .kana_table import GOJUON_ROWS
from .nlp import Analyzer, AnalyzerError, FuriganaAnalyzer

__all__ = ["WebConfig", "create_app"]

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 20000


@dataclass(slots=True)
class WebConfig:
    mode: str = "auto"
    jobs: int = 4
    apply_overrides: bool = True
    analyzer_factory: Callable[[], Analyzer] | None = FuriganaAnalyzer


def create_app(config: WebConfig) -> FastAPI:
    if config.mode not in CONVERSION_MODES:
        raise ValueError(f"Unknown conversion mode: {config.mode}")

    app = FastAPI(title="kashi")
    app.state.config = config

    analyzer_lock = threading.Lock()
    analyzer_state: dict[str, object] = {}

    def _get_analyzer() -> Analyzer | None:
        # Built once; a failed build is remembered so every request sees the same answer.
        with analyzer_lock:
            if "analyzer" in analyzer_state:
                return analyzer_state["analyzer"]  # type: ignore[return-value]
            analyzer: Analyzer | None = None
            error: str | None = None
            if config.analyzer_factory is not None:
                try:
                    analyzer = config.analyzer_factory()
                except AnalyzerError as exc:
                    error = str(exc)
                    logger.warning("Analyzer unavailable: %s", exc)
            analyzer_state["analyzer"] = analyzer
            analyzer_state["error"] = error
            return analyzer

    @app.get("/api/health")
    def api_health() -> JSONResponse:
        analyzer = _get_analyzer() if config.mode != "fallback" else None
        return JSONResponse(
            {
                "status": "ok",
                "mode": config.mode,
                "analyzer": analyzer is not None,
                "analyzer_error": analyzer_state.get("error"),
            }
        )

    @app.post("/api/convert")
    def api_convert(payload: dict[str, object] = Body(...)) -> JSONResponse:
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Invalid payload.")
        text = payload.get("text")
        if not isinstance(text, str) or not text.strip():
            raise HTTPException(status_code=400, detail="text is required.")
        if len(text) > MAX_TEXT_LENGTH:
            raise HTTPException(status_code=400, detail=f"text exceeds {MAX_TEXT_LENGTH} characters.")
        mode = payload.get("mode", config.mode)
        if not isinstance(mode, str) or mode not in CONVERSION_MODES:
            raise HTTPException(
                status_code=400,
                detail=f"mode must be one of: {', '.join(CONVERSION_MODES)}.",
            )
        analyzer = _get_analyzer() if mode != "fallback" else None
        converter_config = ConverterConfig(
            mode=mode,  # type: ignore[arg-type]
            jobs=config.jobs,
            apply_overrides=config.apply_overrides,
        )
        try:
            lines = convert_lyrics(text, analyzer, converter_config)
        except AnalyzerError as exc:
            raise HTTPException(status_code=503, detail=f"Analyzer unavailable: {exc}") from exc
        payloads = [line_payload(line) for line in lines]
        sources = {entry["source"] for entry in payloads}
        return JSONResponse(
            {
                "lines": payloads,
                "source": sources.pop() if len(sources) == 1 else None,
            }
        )

    @app.get("/api/gojuon")
    def api_gojuon(script: str = Query("hira")) -> JSONResponse:
        if script not in {"hira", "kata"}:
            raise HTTPException(status_code=400, detail="script must be 'hira' or 'kata'.")
        rows = [
            [
                None
                if cell is None
                else {"kana": cell.hira if script == "hira" else cell.kata, "romaji": cell.romaji}
                for cell in row
            ]
            for row in GOJUON_ROWS
        ]
        return JSONResponse({"script": script, "rows": rows})

    return app
