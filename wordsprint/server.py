import logging
from datetime import date
from fastapi import BackgroundTasks, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from wordsprint.settings import settings

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger("wordsprint")

# Populated at startup
_engine = None


def _difficulty_or_400(name: str | None, default: str):
    from wordsprint.evaluator import Difficulty
    try:
        return Difficulty.from_name(name or default)
    except ValueError as e:
        raise HTTPException(400, str(e))


def _seed_or_400(seed: str) -> str:
    from wordsprint.grid import is_valid_seed

    seed = seed.strip().upper()
    if not is_valid_seed(seed):
        raise HTTPException(400, f"Board must be 16 letters A-Z, got: {seed!r}")
    return seed


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _engine

        from wordsprint.engine import get_engine
        from wordsprint.evaluator import Difficulty
        from wordsprint.lexicon import LexiconError
        from wordsprint.settings import apply_log_level

        apply_log_level(settings)
        logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
        try:
            _engine = get_engine(settings)
        except LexiconError as e:
            logger.error("Cannot start without a dictionary: %s", e)
            raise
        logger.info("Engine ready (%d words)", len(_engine.lexicon))

        if settings.POOL_WARM_ON_STARTUP and settings.POOL_TARGET > 0:
            difficulty = Difficulty.from_name(settings.DEFAULT_DIFFICULTY)
            _engine.pool.ensure_in_background(settings.POOL_TARGET, difficulty)

        yield

    application = FastAPI(title="WordSprint", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "words_loaded": len(_engine.lexicon) if _engine is not None else 0,
            "pool_size": len(_engine.pool) if _engine is not None else 0,
        }

    @application.get("/words/validate")
    async def validate_word(word: str):
        return {"word": word.strip().upper(), "valid": _engine.is_word_valid(word)}

    @application.get("/boards/{seed}/words")
    def board_words(seed: str, depth_limit: int | None = Query(None, ge=1), paths: bool = False):
        from wordsprint.grid import seed_to_rows

        seed = _seed_or_400(seed)
        found = _engine.words_on_board(seed, depth_limit)
        # Longest first, then alphabetical
        ordered = sorted(found, key=lambda w: (-len(w), w))
        words = ordered[:settings.MAX_RESULTS] if settings.MAX_RESULTS > 0 else ordered
        logger.info("Board %s: %d words (returning %d)", seed, len(ordered), len(words))

        result = {
            "seed": seed,
            "board": seed_to_rows(seed),
            "words": words,
            "word_count": len(ordered),
        }
        if paths:
            result["paths"] = _engine.word_paths(seed, words)
        return result

    @application.post("/boards/{seed}/round")
    async def play_round(seed: str, request: Request):
        """Score a finished round: body is {"paths": [[[row, col], ...], ...]}."""
        seed = _seed_or_400(seed)
        body = await request.json()
        submitted = body.get("paths") if isinstance(body, dict) else None
        if not isinstance(submitted, list):
            raise HTTPException(400, "Body must be {\"paths\": [[[row, col], ...], ...]}")

        rnd = _engine.new_round(seed)
        rejected = 0
        for path in submitted:
            try:
                cells = [(int(r), int(c)) for r, c in path]
            except (TypeError, ValueError):
                rejected += 1
                continue
            if rnd.submit(cells) is None:
                rejected += 1
        rnd.finish()

        logger.info("Round on %s: %d accepted, %d rejected, score %d",
                    seed, len(rnd.accepted), rejected, rnd.score)
        return {"seed": seed, "accepted": rnd.accepted, "rejected": rejected, "score": rnd.score}

    @application.get("/grid")
    def playable_grid(background_tasks: BackgroundTasks, difficulty: str | None = None):
        from wordsprint.grid import seed_to_rows
        from wordsprint.metrics import StageTimer

        level = _difficulty_or_400(difficulty, settings.DEFAULT_DIFFICULTY)
        timer = StageTimer()
        with timer.stage("grid"):
            seed = _engine.request_playable_grid(level)
        timer.log(seed=seed, difficulty=level.name)

        background_tasks.add_task(_engine.pool.ensure, settings.POOL_TARGET, level)

        return JSONResponse({
            "seed": seed,
            "board": seed_to_rows(seed),
            "difficulty": level.name,
            "stage_timings": timer.summary(),
        })

    @application.get("/daily")
    def daily(day: str | None = Query(None, alias="date")):
        from wordsprint.daily import day_id
        from wordsprint.grid import seed_to_rows

        try:
            day_key = day_id(day if day else date.today())
        except ValueError:
            raise HTTPException(400, f"date must be YYYYMMDD, got: {day!r}")

        level = _difficulty_or_400(None, settings.DAILY_DIFFICULTY)
        seed = _engine.daily_grid(day_key, level)
        return {"date": day_key, "seed": seed, "board": seed_to_rows(seed)}

    @application.get("/api/settings")
    async def api_get_settings():
        from wordsprint.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordsprint.settings import update_settings, get_editable_settings
        body = await request.json()
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def run():
    import uvicorn
    uvicorn.run("wordsprint.server:app", host="0.0.0.0", port=settings.PORT)


app = create_app()
