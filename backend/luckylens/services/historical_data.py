"""
Historical draw results ingestion and management
Syncs from the Magayo results API when the game is supported,
otherwise from the bundled JSON draw files
"""
import json
import httpx
import pandas as pd
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime, timedelta
import logging
from luckylens.core.config import settings
from luckylens.models.history import HistoricalDraw, SyncResult
from luckylens.services.game_catalog import get_game_by_id

logger = logging.getLogger(__name__)

DRAW_COLUMNS = ["game_id", "date", "primary_numbers", "secondary_numbers", "jackpot", "winners"]

# Internal game ids -> Magayo game ids (Lucky for Life is not offered)
MAGAYO_GAME_IDS: Dict[str, str] = {
    "powerball": "us_powerball",
    "megamillions": "us_mega_millions",
    "cash4life": "us_cash4life",
    "lottoamerica": "us_lotto_america",
}

# Magayo games whose result string carries no bonus ball
MAGAYO_GAMES_WITHOUT_BONUS = {"us_ca_fantasy"}


def draws_to_frame(draws: List[HistoricalDraw]) -> pd.DataFrame:
    """Tabular view of draws, one row per draw"""
    if not draws:
        return pd.DataFrame(columns=DRAW_COLUMNS)
    frame = pd.DataFrame([draw.model_dump() for draw in draws], columns=DRAW_COLUMNS)
    frame["date"] = pd.to_datetime(frame["date"])
    return frame


def _row_to_draw(row: Dict[str, Any]) -> HistoricalDraw:
    jackpot = row.get("jackpot")
    return HistoricalDraw(
        game_id=row["game_id"],
        date=pd.Timestamp(row["date"]).to_pydatetime(),
        primary_numbers=[int(n) for n in row["primary_numbers"]],
        secondary_numbers=[int(n) for n in row["secondary_numbers"]],
        jackpot=jackpot if isinstance(jackpot, str) else None,
        winners=int(row.get("winners") or 0),
    )


@dataclass
class MagayoResult:
    """Latest result as reported by Magayo"""
    date: str
    main_balls: List[int]
    bonus_ball: int
    jackpot: Optional[str] = None

    def to_draw(self, game_id: str) -> HistoricalDraw:
        return HistoricalDraw(
            date=pd.to_datetime(self.date).to_pydatetime(),
            game_id=game_id,
            primary_numbers=list(self.main_balls),
            secondary_numbers=[self.bonus_ball] if self.bonus_ball else [],
            jackpot=self.jackpot,
        )


class MagayoClient:
    """Client for the Magayo lottery results API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._base_url = base_url or settings.MAGAYO_API_URL
        self._api_key = api_key if api_key is not None else settings.MAGAYO_API_KEY
        self._transport = transport

    @staticmethod
    def is_supported(game_id: str) -> bool:
        return game_id in MAGAYO_GAME_IDS

    async def fetch_raw(self, provider_game_id: str) -> Dict[str, Any]:
        """
        Raw provider payload for a Magayo game id
        Raises httpx.HTTPError on transport or HTTP status failures
        """
        async with httpx.AsyncClient(
            timeout=settings.MAGAYO_TIMEOUT_SECONDS,
            transport=self._transport
        ) as client:
            response = await client.get(
                self._base_url,
                params={"api_key": self._api_key, "game": provider_game_id},
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            return response.json()

    @staticmethod
    def parse_results(provider_game_id: str, payload: Dict[str, Any]) -> MagayoResult:
        """
        Parse a results payload
        Digit games report "845"; ball games report "25,36,42,51,58,06,2"
        with the bonus ball last
        """
        if payload.get("error") != 0:
            raise ValueError(f"Magayo API error: {payload.get('error')}")

        results = str(payload.get("results", ""))
        if "," not in results:
            return MagayoResult(
                date=payload["draw"],
                main_balls=[int(d) for d in results],
                bonus_ball=0,
            )

        parts = [int(p) for p in results.split(",")]
        if provider_game_id in MAGAYO_GAMES_WITHOUT_BONUS:
            return MagayoResult(date=payload["draw"], main_balls=parts, bonus_ball=0)
        return MagayoResult(date=payload["draw"], main_balls=parts[:-1], bonus_ball=parts[-1])

    async def fetch_latest_results(self, game_id: str) -> Optional[MagayoResult]:
        """Latest result for an internal game id, None when unsupported or failing"""
        provider_game_id = MAGAYO_GAME_IDS.get(game_id)
        if not provider_game_id:
            logger.warning(f"Game {game_id} not supported by Magayo API")
            return None

        try:
            payload = await self.fetch_raw(provider_game_id)
            return self.parse_results(provider_game_id, payload)
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error(f"Magayo API error for {game_id}: {e}")
            return None

    async def fetch_historical_results(self, game_id: str, days: int = 30) -> List[MagayoResult]:
        """
        Results for the last `days` days
        The free tier only serves the latest draw, so this is at most one result
        """
        latest = await self.fetch_latest_results(game_id)
        return [latest] if latest else []


class HistoricalDataService:
    """Service for managing historical draw results"""

    def __init__(
        self,
        data_dir: Optional[str] = None,
        magayo_client: Optional[MagayoClient] = None
    ):
        self._data: pd.DataFrame = pd.DataFrame(columns=DRAW_COLUMNS)
        self._data_dir = Path(data_dir or settings.DRAW_DATA_DIR)
        self._magayo = magayo_client or MagayoClient()
        self._last_sync: Dict[str, datetime] = {}
        self._cache_ttl = timedelta(seconds=settings.RESULTS_CACHE_TTL)

    @property
    def magayo(self) -> MagayoClient:
        return self._magayo

    def load_local_results(self, game_id: str) -> List[HistoricalDraw]:
        """
        Read the bundled JSON draw file for a game
        Entries look like {"drawDate", "mainBalls", "bonusBall", "jackpotAmount"}
        """
        game = get_game_by_id(game_id)
        if game is None:
            raise ValueError(f"Unknown game: {game_id}")

        path = self._data_dir / (game.data_file or f"{game_id}.json")
        if not path.exists():
            raise FileNotFoundError(f"Draw data file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)

        draws = []
        for entry in entries:
            bonus = entry.get("bonusBall")
            draws.append(HistoricalDraw(
                date=pd.to_datetime(entry["drawDate"]).to_pydatetime(),
                game_id=game_id,
                primary_numbers=entry["mainBalls"],
                secondary_numbers=[bonus] if bonus else [],
                jackpot=entry.get("jackpotAmount"),
                winners=0,
            ))
        return draws

    def upsert_draws(self, draws: List[HistoricalDraw]) -> int:
        """
        Add draws not yet stored, keyed by (game_id, date)
        Returns: number of new draws
        """
        if not draws:
            return 0
        before = len(self._data)
        incoming = draws_to_frame(draws)
        if self._data.empty:
            combined = incoming
        else:
            combined = pd.concat([self._data, incoming], ignore_index=True)
        self._data = combined.drop_duplicates(subset=["game_id", "date"], keep="first").reset_index(drop=True)
        return len(self._data) - before

    async def sync_results(self, game_id: str, force_refresh: bool = False) -> SyncResult:
        """
        Sync draw results for a game
        Magayo first for supported games, bundled JSON otherwise or when Magayo has nothing
        Never raises; failures are reported in the result
        """
        last_sync = self._last_sync.get(game_id)
        if not force_refresh and last_sync and datetime.now() - last_sync < self._cache_ttl:
            logger.info(f"Using cached results for {game_id}")
            return SyncResult(success=True, count=self.get_result_count(game_id), source="cache")

        logger.info(f"Syncing draw results for {game_id}...")
        try:
            if self._magayo.is_supported(game_id):
                results = await self._magayo.fetch_historical_results(game_id, days=30)
                if results:
                    added = self.upsert_draws([r.to_draw(game_id) for r in results])
                    self._last_sync[game_id] = datetime.now()
                    logger.info(f"Synced {len(results)} result(s) for {game_id} from Magayo ({added} new)")
                    return SyncResult(success=True, count=len(results), source="magayo")

            draws = self.load_local_results(game_id)
            added = self.upsert_draws(draws)
            self._last_sync[game_id] = datetime.now()
            logger.info(f"Loaded {len(draws)} draws for {game_id} from local data ({added} new)")
            return SyncResult(success=True, count=len(draws), source="local")
        except Exception as e:
            logger.error(f"Sync error for {game_id}: {e}")
            return SyncResult(success=False, count=0, error=str(e))

    def _game_frame(self, game_id: str) -> pd.DataFrame:
        if self._data.empty:
            return self._data
        return self._data[self._data["game_id"] == game_id]

    def get_draw_results(
        self,
        game_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        month: Optional[str] = None
    ) -> List[HistoricalDraw]:
        """
        Draws for a game, most recent first

        Args:
            game_id: Game id
            limit: Maximum number of draws
            offset: Draws to skip
            month: Only draws in this month ("YYYY-MM")
        """
        frame = self._game_frame(game_id)
        if frame.empty:
            return []

        frame = frame.sort_values("date", ascending=False)
        if month:
            start = pd.Timestamp(f"{month}-01")
            end = start + pd.DateOffset(months=1)
            frame = frame[(frame["date"] >= start) & (frame["date"] < end)]

        if offset:
            frame = frame.iloc[offset:]
        if limit:
            frame = frame.iloc[:limit]

        return [_row_to_draw(row) for row in frame.to_dict("records")]

    def get_result_count(self, game_id: str) -> int:
        return len(self._game_frame(game_id))

    def has_draw_results(self, game_id: str) -> bool:
        return self.get_result_count(game_id) > 0

    def get_last_sync_date(self, game_id: str) -> Optional[datetime]:
        return self._last_sync.get(game_id)

    def get_available_months(self, game_id: str) -> List[str]:
        """Months with draws ("YYYY-MM"), newest first"""
        frame = self._game_frame(game_id)
        if frame.empty:
            return []
        months = frame["date"].dt.strftime("%Y-%m").unique().tolist()
        return sorted(months, reverse=True)

    def clear_results(self, game_id: Optional[str] = None) -> None:
        if game_id:
            if not self._data.empty:
                self._data = self._data[self._data["game_id"] != game_id].reset_index(drop=True)
            self._last_sync.pop(game_id, None)
        else:
            self._data = pd.DataFrame(columns=DRAW_COLUMNS)
            self._last_sync.clear()

    def get_frequencies(self, game_id: str) -> Tuple[Dict[int, int], Dict[int, int]]:
        """
        Occurrence counts per number for (primary, secondary) pools
        Only numbers that were drawn appear; both maps are empty without history
        """
        frame = self._game_frame(game_id)
        return (
            self._count_numbers(frame, "primary_numbers"),
            self._count_numbers(frame, "secondary_numbers"),
        )

    @staticmethod
    def _count_numbers(frame: pd.DataFrame, column: str) -> Dict[int, int]:
        if frame.empty:
            return {}
        values = frame[column].explode().dropna()
        if values.empty:
            return {}
        counts = values.astype(int).value_counts()
        return {int(number): int(count) for number, count in counts.items()}


historical_data_service = HistoricalDataService()
