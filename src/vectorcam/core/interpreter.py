"""SVG path data interpreter.

Turns a path ``d`` attribute into contours made of straight segments. Curves
and arcs are sampled as they are read; every segment ends exactly on the
point the path data declares.
"""

from dataclasses import dataclass, field

import structlog

from vectorcam.config import GeometryConfig
from vectorcam.core._bezier import cubic_samples, delta_step, quadratic_samples
from vectorcam.core.arc import resolve_endpoint_arc, sample_arc
from vectorcam.core.geometry import append_points, reflect
from vectorcam.core.tokenizer import PATH_COMMANDS, PathTokenizer
from vectorcam.domain import Contour, Point
from vectorcam.exceptions import NumericParseError, TokenizeError

logger = structlog.get_logger(__name__)


@dataclass
class _PathState:
    """Mutable state for one interpretation pass."""

    current: Point = field(default_factory=lambda: Point(0.0, 0.0))
    start: Point = field(default_factory=lambda: Point(0.0, 0.0))
    reflection: Point = field(default_factory=lambda: Point(0.0, 0.0))
    points: list[Point] = field(default_factory=list)
    contours: list[Contour] = field(default_factory=list)
    errors: list[TokenizeError] = field(default_factory=list)


class PathInterpreter:
    """Interprets SVG path data into contours.

    The interpreter holds configuration only. Each call to ``interpret``
    works on fresh state, so one instance can be reused and shared.

    Args:
        import_resolution: Source units per canonical unit, used to pick
            the sampling density
        curve_section: Canonical arc length covered by one arc segment
        min_bezier_step: Smallest parameter step for Bezier curves
    """

    def __init__(
        self,
        import_resolution: float = 1.0,
        curve_section: float = 1.0,
        min_bezier_step: float = 0.01,
    ) -> None:
        self.import_resolution = import_resolution
        self.curve_section = curve_section
        self.min_bezier_step = min_bezier_step

    @classmethod
    def from_config(cls, geometry: GeometryConfig, import_resolution: float) -> "PathInterpreter":
        return cls(
            import_resolution=import_resolution,
            curve_section=geometry.curve_section,
            min_bezier_step=geometry.min_bezier_step,
        )

    def interpret(self, data: str) -> list[Contour]:
        """Interpret path data.

        Args:
            data: Contents of a path ``d`` attribute

        Returns:
            Contours in path coordinates. Contours of two points or fewer
            are dropped.

        Raises:
            NumericParseError: If a command argument is not a number
        """
        contours, _ = self.interpret_with_report(data)
        return contours

    def interpret_with_report(self, data: str) -> tuple[list[Contour], list[TokenizeError]]:
        """Interpret path data and report skipped characters.

        Args:
            data: Contents of a path ``d`` attribute

        Returns:
            Tuple of (contours, recovered tokenize errors)

        Raises:
            NumericParseError: If a command argument is not a number
        """
        state = _PathState()
        tokenizer = PathTokenizer(data)
        command: str | None = None

        while True:
            tokenizer.skip_separators()
            if tokenizer.at_end:
                break

            character = tokenizer.peek()
            if character in PATH_COMMANDS:
                tokenizer.advance()
                command = character
                if command in "Zz":
                    self._close(state)
                else:
                    self._execute(command, tokenizer, state)
            elif tokenizer.at_number() and command is not None and command not in "Zz":
                # Extra coordinates after a move are implicit line commands
                if command == "M":
                    command = "L"
                elif command == "m":
                    command = "l"
                self._execute(command, tokenizer, state)
            else:
                error = TokenizeError(data, tokenizer.position, character)
                logger.debug("Path character skipped", error=str(error))
                state.errors.append(error)
                tokenizer.advance()

        self._finalize(state, closed=False)
        return state.contours, state.errors

    def _number(self, tokenizer: PathTokenizer) -> float:
        tokenizer.skip_separators()
        position = tokenizer.position
        token = tokenizer.extract_number()
        try:
            return float(token)
        except ValueError:
            raise NumericParseError(token, position) from None

    def _flag(self, tokenizer: PathTokenizer) -> bool:
        # Arc flags are single digits and may be written without separators
        tokenizer.skip_separators()
        position = tokenizer.position
        character = tokenizer.peek()
        if character not in ("0", "1"):
            raise NumericParseError(character, position)
        tokenizer.advance()
        return character == "1"

    def _point(self, tokenizer: PathTokenizer, origin: Point, relative: bool) -> Point:
        x = self._number(tokenizer)
        y = self._number(tokenizer)
        if relative:
            return Point(origin.x + x, origin.y + y)
        return Point(x, y)

    def _execute(self, command: str, tokenizer: PathTokenizer, state: _PathState) -> None:
        relative = command.islower()
        op = command.upper()
        origin = state.current

        if op == "M":
            self._move_to(state, self._point(tokenizer, origin, relative))
        elif op == "L":
            self._line_to(state, self._point(tokenizer, origin, relative))
        elif op == "H":
            x = self._number(tokenizer)
            self._line_to(state, Point(origin.x + x if relative else x, origin.y))
        elif op == "V":
            y = self._number(tokenizer)
            self._line_to(state, Point(origin.x, origin.y + y if relative else y))
        elif op == "C":
            c1 = self._point(tokenizer, origin, relative)
            c2 = self._point(tokenizer, origin, relative)
            end = self._point(tokenizer, origin, relative)
            self._cubic_to(state, c1, c2, end)
        elif op == "S":
            c2 = self._point(tokenizer, origin, relative)
            end = self._point(tokenizer, origin, relative)
            self._cubic_to(state, state.reflection, c2, end)
        elif op == "Q":
            control = self._point(tokenizer, origin, relative)
            end = self._point(tokenizer, origin, relative)
            self._quadratic_to(state, control, end)
        elif op == "T":
            end = self._point(tokenizer, origin, relative)
            self._quadratic_to(state, state.reflection, end)
        elif op == "A":
            rx = self._number(tokenizer)
            ry = self._number(tokenizer)
            rotation = self._number(tokenizer)
            large_arc = self._flag(tokenizer)
            sweep = self._flag(tokenizer)
            end = self._point(tokenizer, origin, relative)
            self._arc_to(state, rx, ry, rotation, large_arc, sweep, end)

    def _extend(self, state: _PathState, points: list[Point]) -> None:
        if not state.points:
            state.points.append(state.current)
        append_points(state.points, points)
        state.current = points[-1]

    def _move_to(self, state: _PathState, point: Point) -> None:
        self._finalize(state, closed=False)
        state.points = [point]
        state.start = point
        state.current = point
        state.reflection = point

    def _line_to(self, state: _PathState, point: Point) -> None:
        self._extend(state, [point])
        state.reflection = point

    def _cubic_to(self, state: _PathState, c1: Point, c2: Point, end: Point) -> None:
        p0 = state.current
        step = delta_step(p0, end, self.import_resolution, self.min_bezier_step)
        self._extend(state, cubic_samples(step, p0, c1, c2, end) + [end])
        state.reflection = reflect(c2, end)

    def _quadratic_to(self, state: _PathState, control: Point, end: Point) -> None:
        p0 = state.current
        step = delta_step(p0, end, self.import_resolution, self.min_bezier_step)
        self._extend(state, quadratic_samples(step, p0, control, end) + [end])
        state.reflection = reflect(control, end)

    def _arc_to(
        self,
        state: _PathState,
        rx: float,
        ry: float,
        rotation: float,
        large_arc: bool,
        sweep: bool,
        end: Point,
    ) -> None:
        spec = resolve_endpoint_arc(state.current, end, rx, ry, rotation, large_arc, sweep)
        if spec is None:
            self._extend(state, [end])
        else:
            samples = sample_arc(spec, end, self.import_resolution, self.curve_section)
            self._extend(state, samples[1:])
        state.reflection = end

    def _close(self, state: _PathState) -> None:
        if state.points:
            append_points(state.points, [state.start])
        self._finalize(state, closed=True)
        state.current = state.start
        state.reflection = state.start

    def _finalize(self, state: _PathState, closed: bool) -> None:
        if not state.points:
            return
        contour = Contour(points=state.points, closed=closed)
        state.points = []
        if contour.is_degenerate():
            logger.debug("Degenerate contour dropped", points=len(contour))
            return
        state.contours.append(contour)
