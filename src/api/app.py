"""FastAPI transport around the game engine."""
from __future__ import annotations

import logging
import random
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI, HTTPException

from src.config import Settings, load_settings
from src.engine import (
    WORDS_PER_GAME,
    GameEngine,
    GameError,
    GameOptions,
    GameSnapshot,
    InvalidStageError,
    NotFoundError,
    TeamPlayer,
    advance_snapshot,
    fresh_snapshot,
    load_wordlist,
    new_game,
    restore_game,
)
from src.storage import GameStore

from .models import (
    CreateGameRequest,
    GameListResponse,
    GameResponse,
    NextGameRequest,
    NextWordRequest,
    PlayerRequest,
    StateResponse,
    UpdatePlayerRequest,
    WordRequest,
)
from .registry import GameRegistry, GameSession

logger = logging.getLogger("game_api")


def _http_error(exc: GameError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidStageError):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


def create_app(
    settings: Settings | None = None,
    store: GameStore | None = None,
    word_set: list[str] | None = None,
) -> FastAPI:
    """
    Build the API.

    Without an explicit `word_set` the configured word list is loaded, and
    without a store games are kept under `settings.data_dir`. Every
    successful mutation is saved; unknown game ids are restored from the
    saved record, or rebuilt from the lineage snapshot when only that
    survives.
    """
    if settings is None:
        settings = load_settings()
    if word_set is None:
        word_set = load_wordlist(settings.wordlist_path)
    if store is None:
        store = GameStore(settings.data_dir)

    registry = GameRegistry()

    def _session(game_id: str) -> GameSession:
        session = registry.get(game_id)
        if session is not None:
            return session
        try:
            record = store.load_game(game_id)
        except FileNotFoundError:
            snapshot = store.load_snapshot(game_id)
            if snapshot is None:
                raise HTTPException(status_code=404, detail="Game not found")
            # Options are not part of a snapshot; a short set means manual words.
            options = settings.default_options().model_copy(
                update={"random_words": len(snapshot.word_set) >= WORDS_PER_GAME}
            )
            logger.info(f"Rebuilt game {game_id} from its lineage snapshot")
            return registry.put(new_game(game_id, snapshot, options))
        logger.info(f"Restored game {game_id} from storage")
        return registry.put(restore_game(record))

    def _check_word_set(words: list[str], options: GameOptions) -> None:
        if options.random_words and len(words) < WORDS_PER_GAME:
            raise HTTPException(
                status_code=400,
                detail=f"Word set needs at least {WORDS_PER_GAME} words, got {len(words)}",
            )

    async def _mutate(
        game_id: str,
        action: Callable[[GameEngine], bool | None],
    ) -> GameResponse:
        session = _session(game_id)
        async with session.lock:
            try:
                advanced = action(session.engine)
            except GameError as exc:
                logger.warning(f"Rejected mutation on game {game_id}: {exc}")
                raise _http_error(exc) from exc
            store.save_game(session.engine.game)
            return GameResponse.from_engine(session.engine, advanced)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        store.ensure_storage()
        yield

    app = FastAPI(title="Word Game API", lifespan=lifespan)

    @app.get("/games", response_model=GameListResponse)
    async def list_games() -> GameListResponse:
        return GameListResponse(game_ids=sorted(set(registry.ids()) | set(store.list_games())))

    @app.post("/games", response_model=GameResponse)
    async def create_game(request: CreateGameRequest) -> GameResponse:
        game_id = request.game_id or uuid.uuid4().hex[:12]
        if game_id in registry or store.has_game(game_id):
            raise HTTPException(status_code=409, detail="Game already exists")

        options = request.options or settings.default_options()
        if request.word_set is not None:
            words = request.word_set
        else:
            words = list(word_set) if options.random_words else []
        _check_word_set(words, options)

        if request.seed is not None:
            snapshot = GameSnapshot(seed=request.seed, word_set=list(words))
        else:
            snapshot = fresh_snapshot(words, random.Random())

        try:
            engine = new_game(game_id, snapshot, options)
        except IndexError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        registry.put(engine)
        store.save_snapshot(game_id, snapshot)
        store.save_game(engine.game)
        logger.info(f"Game {game_id} created with {len(words)} candidate words")
        return GameResponse.from_engine(engine)

    @app.get("/games/{game_id}", response_model=GameResponse)
    async def get_game(game_id: str) -> GameResponse:
        session = _session(game_id)
        return GameResponse.from_engine(session.engine)

    @app.delete("/games/{game_id}", status_code=204)
    async def delete_game(game_id: str) -> None:
        session = _session(game_id)
        async with session.lock:
            registry.remove(game_id)
            store.delete_game(game_id)
        logger.info(f"Game {game_id} deleted")

    @app.get("/games/{game_id}/state", response_model=StateResponse)
    async def get_state(game_id: str) -> StateResponse:
        session = _session(game_id)
        return StateResponse(game_id=game_id, state_id=session.engine.state_id)

    @app.post("/games/{game_id}/players", response_model=GameResponse)
    async def add_player(game_id: str, request: PlayerRequest) -> GameResponse:
        player = TeamPlayer(team=request.team, player_name=request.player_name)
        return await _mutate(game_id, lambda engine: engine.add_player(player))

    @app.patch("/games/{game_id}/players/{player_name}", response_model=GameResponse)
    async def update_player(
        game_id: str, player_name: str, request: UpdatePlayerRequest
    ) -> GameResponse:
        return await _mutate(
            game_id,
            lambda engine: engine.update_player(player_name, request.team, request.player_name),
        )

    @app.delete("/games/{game_id}/players/{player_name}", response_model=GameResponse)
    async def delete_player(game_id: str, player_name: str) -> GameResponse:
        return await _mutate(game_id, lambda engine: engine.delete_player(player_name))

    @app.post("/games/{game_id}/words", response_model=GameResponse)
    async def add_word(game_id: str, request: WordRequest) -> GameResponse:
        return await _mutate(game_id, lambda engine: engine.add_word(request.word))

    @app.delete("/games/{game_id}/words/{word}", response_model=GameResponse)
    async def delete_word(game_id: str, word: str) -> GameResponse:
        return await _mutate(game_id, lambda engine: engine.delete_word(word))

    @app.post("/games/{game_id}/next-word", response_model=GameResponse)
    async def next_word(game_id: str, request: NextWordRequest) -> GameResponse:
        return await _mutate(game_id, lambda engine: engine.get_next_word(request.correct))

    @app.post("/games/{game_id}/next-turn", response_model=GameResponse)
    async def next_turn(game_id: str) -> GameResponse:
        return await _mutate(game_id, lambda engine: engine.next_turn())

    @app.post("/games/{game_id}/next-stage", response_model=GameResponse)
    async def next_stage(game_id: str) -> GameResponse:
        return await _mutate(game_id, lambda engine: engine.move_to_next_stage())

    @app.post("/games/{game_id}/next-game", response_model=GameResponse)
    async def next_game(game_id: str, request: NextGameRequest | None = None) -> GameResponse:
        session = _session(game_id)
        async with session.lock:
            previous = session.engine.game
            options = previous.options
            if request is not None and request.word_set is not None:
                _check_word_set(request.word_set, options)
                snapshot = fresh_snapshot(request.word_set, random.Random())
            else:
                snapshot = advance_snapshot(previous.snapshot())
            engine = new_game(game_id, snapshot, options)
            session.engine = engine
            store.save_snapshot(game_id, snapshot)
            store.save_game(engine.game)
        logger.info(f"Game {game_id} moved to perm_index {snapshot.perm_index}")
        return GameResponse.from_engine(engine)

    return app
