"""
Battle session: the robots and factions of one game.

The session owns the id -> robot map and the faction registry, and is the
roster the attack selector queries. Turn order is left to the caller.
"""
import itertools
from typing import Optional, Union

import numpy as np

from ..core.data import AttackRecommendation, DamageReport, EvaluationMode, FactionType, LogCategory, LogLevel
from ..core.events import EventManager, EventType, GameEnded, GameStarted, publish_log
from .ai import AIConfig, AttackSelector
from .combat import CombatResolver
from .entities import Catalog, Robot


class Session:
    """Robots and factions taking part in one battle."""

    def __init__(
        self,
        catalog: Catalog,
        rng: Optional[np.random.Generator] = None,
        event_manager: Optional[EventManager] = None,
        ai_config: Optional[AIConfig] = None
    ):
        """Initialize the session.

        Args:
            catalog: Templates robots are built from
            rng: Random source shared by combat and AI
            event_manager: Receives combat, AI and log events (optional)
            ai_config: Attack selector weights; defaults when omitted
        """
        self.catalog = catalog
        self.rng = rng if rng is not None else np.random.default_rng()
        self.event_manager = event_manager
        self.resolver = CombatResolver(rng=self.rng, event_manager=event_manager)
        self.selector = AttackSelector(
            config=ai_config, resolver=self.resolver, rng=self.rng, event_manager=event_manager
        )

        self._robots: dict[str, Robot] = {}
        self._faction_types: dict[str, FactionType] = {}
        self._id_counter = itertools.count(1)
        self._started = False
        self._ended = False

        if self.event_manager is not None:
            self.event_manager.subscribe(
                EventType.ROBOT_DEFEATED,
                self._handle_robot_defeated,
                subscriber_name="Session.robot_defeated"
            )

    def _emit_log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        publish_log(self.event_manager, message, LogCategory.SYSTEM, level, "Session")

    # Factions

    def add_faction(self, name: str, faction_type: FactionType = FactionType.HUMAN) -> None:
        """Register a faction.

        Raises:
            ValueError: If the faction already exists
        """
        if name in self._faction_types:
            raise ValueError(f"Faction already exists: {name}")
        self._faction_types[name] = FactionType(faction_type)

    def set_faction_type(self, name: str, faction_type: FactionType) -> None:
        if name not in self._faction_types:
            raise KeyError(f"No faction named: {name}")
        self._faction_types[name] = FactionType(faction_type)

    def faction_type(self, name: str) -> Optional[FactionType]:
        return self._faction_types.get(name)

    def factions(self) -> list[str]:
        """Registered factions in registration order."""
        return list(self._faction_types)

    def living_factions(self) -> list[str]:
        """Factions with at least one living robot, in registration order."""
        return [
            faction for faction in self._faction_types
            if any(robot.is_alive for robot in self.robots(faction))
        ]

    # Robots

    def add_robot(self, faction: str, model: str, robot_id: Optional[str] = None) -> Robot:
        """Build a robot from the catalog and add it to a faction.

        Args:
            faction: Registered faction name
            model: Catalog model id
            robot_id: Unique id; generated as ``<model>-<n>`` when omitted

        Raises:
            KeyError: If the faction or model is unknown
            ValueError: If the robot id is already taken
        """
        if faction not in self._faction_types:
            raise KeyError(f"No faction named: {faction}")

        if robot_id is None:
            robot_id = f"{model}-{next(self._id_counter)}"
            while robot_id in self._robots:
                robot_id = f"{model}-{next(self._id_counter)}"
        elif robot_id in self._robots:
            raise ValueError(f"Robot id already in use: {robot_id}")

        robot = self.catalog.create_robot(model, robot_id, faction)
        self._robots[robot_id] = robot
        return robot

    def get_robot(self, robot_id: str) -> Robot:
        """Get a robot by id.

        Raises:
            KeyError: If no robot has this id
        """
        if robot_id not in self._robots:
            raise KeyError(f"No robot with id: {robot_id}")
        return self._robots[robot_id]

    def find_robot(self, robot_id: str) -> Optional[Robot]:
        return self._robots.get(robot_id)

    def robots(self, faction: Optional[str] = None, living_only: bool = False) -> list[Robot]:
        """Robots in insertion order, optionally filtered by faction and liveness."""
        return [
            robot for robot in self._robots.values()
            if (faction is None or robot.faction == faction)
            and (not living_only or robot.is_alive)
        ]

    # Game state

    def start_game(self) -> None:
        """Begin the battle.

        Raises:
            ValueError: If fewer than two factions have living robots
        """
        factions = self.living_factions()
        if len(factions) < 2:
            raise ValueError("A game needs at least two factions with living robots")
        self._started = True
        self._ended = False
        self._emit_log(f"Battle started: {' vs. '.join(factions)}")
        if self.event_manager is not None:
            self.event_manager.publish(GameStarted(factions=tuple(factions)), source="Session")

    @property
    def is_game_in_progress(self) -> bool:
        return self._started and len(self.living_factions()) > 1

    def winning_faction(self) -> str:
        """The last faction standing, or "" while the outcome is open."""
        factions = self.living_factions()
        if self._started and len(factions) == 1:
            return factions[0]
        return ""

    def _handle_robot_defeated(self, event) -> None:
        winner = self.winning_faction()
        if winner and not self._ended:
            self._ended = True
            self._emit_log(f"{winner} wins the battle")
            self.event_manager.publish(GameEnded(winning_faction=winner), source="Session")

    # Combat

    def fire(
        self,
        attacker_id: str,
        defender_id: str,
        weapon_selector: str,
        mode: Union[EvaluationMode, int] = EvaluationMode.RANDOM,
        commit: bool = True
    ) -> DamageReport:
        """Fire ``attacker_id``'s matching weapons at ``defender_id``.

        Raises:
            KeyError: If either robot id is unknown
        """
        attacker = self.get_robot(attacker_id)
        defender = self.get_robot(defender_id)
        return self.resolver.fire(attacker, defender, weapon_selector, mode, commit)

    def choose_best_attack(self, actor_id: str) -> AttackRecommendation:
        """Ask the attack selector what ``actor_id`` should do.

        Raises:
            KeyError: If the robot id is unknown
        """
        return self.selector.choose_best_attack(self.get_robot(actor_id), self)
