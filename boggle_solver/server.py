import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from boggle_solver.errors import InvalidInput, NotConfigured
from boggle_solver.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("boggle")

# Populated at startup or through /api/dictionary
_words = None
_solver = None

# Settings that change how the prefix index is built
_REBUILD_FIELDS = ("TILE_SPELLINGS", "MIN_WORD_LENGTH")


class SolveRequest(BaseModel):
    width: int
    height: int
    letters: str | list[str]


class DictionaryRequest(BaseModel):
    words: list[str]


def _load_dictionary():
    from boggle_solver.solver import load_words

    path = settings.DICTIONARY_PATH
    if not path.exists():
        logger.warning("Dictionary %s not found, POST /api/dictionary to load one", path)
        return None
    logger.info("Loading dictionary from %s", path)
    return load_words(str(path))


def _rebuild_solver():
    global _solver
    from boggle_solver.solver import BoggleSolver, parse_tile_spellings

    if _words is None:
        _solver = None
        return
    solver = BoggleSolver(parse_tile_spellings(settings.TILE_SPELLINGS))
    solver.set_legal_words(w for w in _words if len(w) >= settings.MIN_WORD_LENGTH)
    _solver = solver


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _words
        _words = _load_dictionary()
        _rebuild_solver()
        yield

    application = FastAPI(title="Boggle Solver", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "dictionary_loaded": _solver is not None,
            "word_count": _solver.trie.size() if _solver is not None else 0,
        }

    # Plain def: building the index is CPU-bound and runs in the threadpool
    @application.post("/api/dictionary")
    def api_set_dictionary(body: DictionaryRequest):
        global _words
        _words = list(body.words)
        _rebuild_solver()
        logger.info("Dictionary replaced (%d words posted)", len(_words))
        return {"word_count": _solver.trie.size()}

    # Plain def: solving is CPU-bound and runs in the threadpool
    @application.post("/solve")
    def solve(body: SolveRequest):
        from boggle_solver.metrics import StageTimer

        solver = _solver
        if solver is None:
            raise HTTPException(503, "No dictionary loaded")

        logger.info("POST /solve %dx%d", body.width, body.height)
        timer = StageTimer("solve")
        try:
            with timer.stage("search"):
                found = solver.solve_board(body.width, body.height, body.letters)
        except InvalidInput as e:
            raise HTTPException(400, str(e))
        except NotConfigured as e:
            raise HTTPException(503, str(e))

        with timer.stage("sort"):
            all_words = sorted(found)
        words = all_words[:settings.MAX_RESULTS] if settings.MAX_RESULTS > 0 else all_words
        logger.info("Found %d words (returning %d)", len(all_words), len(words))

        if settings.DEBUG:
            _save_debug_artifacts(body, all_words, timer)

        return JSONResponse({
            "width": body.width,
            "height": body.height,
            "words": words,
            "word_count": len(words),
            "total_found": len(all_words),
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        })

    @application.get("/api/settings")
    async def api_get_settings():
        from boggle_solver.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from boggle_solver.settings import update_settings, get_editable_settings
        from boggle_solver.solver import parse_tile_spellings

        body = await request.json()
        if not isinstance(body, dict):
            raise HTTPException(400, "Expected a JSON object of setting names to values")
        errors = {}
        if "TILE_SPELLINGS" in body:
            try:
                parse_tile_spellings(str(body["TILE_SPELLINGS"]))
            except InvalidInput as e:
                errors["TILE_SPELLINGS"] = str(e)
                body = {k: v for k, v in body.items() if k != "TILE_SPELLINGS"}
        errors.update(update_settings(settings, **body))

        if any(name in body and name not in errors for name in _REBUILD_FIELDS):
            _rebuild_solver()

        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def _save_debug_artifacts(body, words, timer):
    import json
    from datetime import datetime

    debug_dir = settings.BASE_DIR / "debug"
    debug_dir.mkdir(exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

    result = {
        "timestamp": ts,
        "width": body.width,
        "height": body.height,
        "letters": body.letters,
        "word_count": len(words),
        "words": words,
        "timings": timer.summary(),
        "total_ms": timer.total_ms,
    }
    with open(debug_dir / f"{ts}_result.json", "w") as f:
        json.dump(result, f, indent=2)

    logger.info("Saved debug artifacts to debug/%s_result.json", ts)


app = create_app()
