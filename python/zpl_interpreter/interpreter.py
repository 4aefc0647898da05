"""Single pass interpreter turning parsed ZPL commands into drawing calls."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Dict, Optional, Sequence

from label_protocol import BarcodeFormatting, Color, RenderingBackend

from .errors import ArgumentFormatError, ArgumentRangeError, StructuralError
from .parser import FONT, NAMED_FONT, ParsedCommand

logger = logging.getLogger(__name__)

# 1mm === 2.8346456693 point (72 / 25.4)
MM_TO_POINTS_SCALE = 2.8346456693

MAX_DOTS = 32000
MIN_FONT_DOTS = 10
MAX_BOX_RADIUS = 8
DEFAULT_FONT_SIZE = 12.0

START_OF_LABEL = "XA"
END_OF_LABEL = "XZ"

ORIENTATIONS = ("N", "R", "I", "B")
YES_NO = ("Y", "N")
BARCODE_MODES = ("N", "U", "A", "D")


class FieldState(enum.Enum):
    IDLE = "idle"
    FIELD_OPEN = "field_open"
    BARCODE_PENDING = "barcode_pending"


def _arg(args: Sequence[str], index: int) -> Optional[str]:
    """Return the stripped argument at ``index``; empty means omitted."""

    if index >= len(args):
        return None
    value = args[index].strip()
    return value or None


class LabelInterpreter:
    """Stateful dispatcher for one label.

    Coordinates handed to the backend are millimetres measured from the
    top-left corner of the page; ZPL arguments are dots and are converted
    with the printer resolution given at construction.
    """

    def __init__(
        self,
        width: float,
        height: float,
        dpmm: int = 8,
        backend: Optional[RenderingBackend] = None,
    ) -> None:
        if backend is None:
            from backends.pdf_backend import PdfBackend

            backend = PdfBackend()
        self.backend = backend
        self.width = width
        self.height = height
        self.dpmm = dpmm

        self.home_x = 0.0
        self.home_y = 0.0
        self.current_field_x = 0.0
        self.current_field_y = 0.0

        self._state = FieldState.IDLE
        self.barcode_content = ""
        self.barcode_formatting: list[str] = []
        self._field_font_active = False
        self._font_size = DEFAULT_FONT_SIZE

        # ^BY defaults, in dots
        self.module_width = 2
        self.wide_ratio = 3.0
        self.barcode_height = 10

        self._handlers: Dict[str, Callable[..., None]] = {
            FONT: self.A,
            NAMED_FONT: self.A_named,
            "BC": self.BC,
            "BY": self.BY,
            "FD": self.FD,
            "FO": self.FO,
            "FS": self.FS,
            "GB": self.GB,
            "LH": self.LH,
        }

        self.backend.create_document(width, height)
        self._default_font()

    # ------------------------------------------------------------------
    @property
    def state(self) -> FieldState:
        return self._state

    @property
    def in_barcode(self) -> bool:
        return self._state is FieldState.BARCODE_PENDING

    @property
    def cursor(self) -> tuple[float, float]:
        return self.current_field_x, self.current_field_y

    @property
    def home(self) -> tuple[float, float]:
        return self.home_x, self.home_y

    @property
    def font_size(self) -> float:
        return self._font_size

    @property
    def field_font_active(self) -> bool:
        """True while an ^A selection overrides the default font for this field."""
        return self._field_font_active

    def dots_to_mm(self, dots: float) -> float:
        return dots / self.dpmm

    @staticmethod
    def mm_to_points(mm: float) -> float:
        return mm * MM_TO_POINTS_SCALE

    # ------------------------------------------------------------------
    def run(self, commands: Sequence[ParsedCommand]) -> "LabelInterpreter":
        """Check the ^XA ... ^XZ envelope, then execute the interior in order."""

        self.validate_envelope(commands)
        for command in commands[1:-1]:
            self.dispatch(command.name, command.args)
        return self

    @staticmethod
    def validate_envelope(commands: Sequence[ParsedCommand]) -> None:
        if not commands or commands[0].name != START_OF_LABEL:
            first = commands[0].name if commands else None
            raise StructuralError(
                "start", f"Label must start with ^{START_OF_LABEL} (got {first!r})", first
            )
        if len(commands) < 2 or commands[-1].name != END_OF_LABEL:
            last = commands[-1].name if len(commands) > 1 else None
            raise StructuralError(
                "end", f"Label must end with ^{END_OF_LABEL} (got {last!r})", last
            )
        for command in commands[1:-1]:
            if command.name == START_OF_LABEL:
                raise StructuralError("start", f"^{START_OF_LABEL} cannot be nested", command.name)
            if command.name == END_OF_LABEL:
                raise StructuralError("end", f"^{END_OF_LABEL} before the end of the label", command.name)

    def dispatch(self, name: str, args: Sequence[str] = ()) -> "LabelInterpreter":
        handler = self._handlers.get(name.upper())
        if handler is None:
            logger.debug("Ignoring unsupported command ^%s %s", name, list(args))
            return self
        handler(*args)
        return self

    def finalize(self) -> bytes:
        return self.backend.serialize()

    # ------------------------------------------------------------------
    def _int(
        self,
        command: str,
        field: str,
        value: Optional[str],
        default: Optional[int],
        low: int,
        high: int,
        bound: Optional[str] = None,
    ) -> int:
        if value is None:
            if default is None:
                raise ArgumentFormatError(command, field, value)
            return default
        try:
            number = int(value)
        except ValueError:
            raise ArgumentFormatError(command, field, value) from None
        if number < low or number > high:
            raise ArgumentRangeError(
                command,
                field,
                number,
                bound or f"greater than or equal to {low} and less than or equal to {high}",
            )
        return number

    @staticmethod
    def _choice(command: str, field: str, value: Optional[str], default: str, options: Sequence[str]) -> str:
        if value is None:
            return default
        choice = value.upper()
        if choice not in options:
            raise ArgumentRangeError(command, field, value, "one of " + ", ".join(f'"{o}"' for o in options))
        return choice

    def _set_xy(self, x: int, y: int) -> None:
        self.current_field_x = self.home_x + self.dots_to_mm(x)
        self.current_field_y = self.home_y + self.dots_to_mm(y)
        self.backend.move_cursor(self.current_field_x, self.current_field_y)

    def _default_font(self) -> None:
        self._font_size = DEFAULT_FONT_SIZE
        self._field_font_active = False
        self.backend.set_font_size(DEFAULT_FONT_SIZE)

    def _render_barcode(self) -> None:
        """Consume the captured barcode and hand it to the backend."""

        args = self.barcode_formatting
        height = _arg(args, 1)
        formatting = BarcodeFormatting(
            symbology="code128",
            raw=list(args),
            orientation=(_arg(args, 0) or "N").upper(),
            height_mm=self.dots_to_mm(int(height) if height else self.barcode_height),
            module_width_mm=self.dots_to_mm(self.module_width),
            ratio=self.wide_ratio,
            print_above=(_arg(args, 2) or "N").upper() == "Y",
            print_below=(_arg(args, 3) or "Y").upper() == "Y",
            check_digit=(_arg(args, 4) or "N").upper() == "Y",
            mode=(_arg(args, 5) or "N").upper(),
        )
        logger.debug("Rendering barcode %r with %s", self.barcode_content, formatting)
        self.backend.draw_barcode(self.barcode_content, formatting)

        self.barcode_content = ""
        self.barcode_formatting = []

    # ------------------------------------------------------------------
    # ZPL commands
    # ------------------------------------------------------------------
    def A(self, *args: str) -> None:
        """^Afo,h,w - scalable/bitmapped font for the current field only.

        The backend works in points rather than separate character width and
        height, so width wins when given and height is used otherwise.
        """

        font = _arg(args, 0)
        if font is not None and len(font) > 1:
            self._choice("A", "o", font[1:], "N", ORIENTATIONS)

        h_arg, w_arg = _arg(args, 1), _arg(args, 2)
        if h_arg is None and w_arg is None:
            # Defaults passed. Use the minimum size of 10 dots
            h_arg = str(MIN_FONT_DOTS)

        h = self._int("A", "h", h_arg, MIN_FONT_DOTS, MIN_FONT_DOTS, MAX_DOTS) if h_arg else None
        w = self._int("A", "w", w_arg, None, MIN_FONT_DOTS, MAX_DOTS) if w_arg else None

        dots = w if w is not None else h
        self._font_size = self.mm_to_points(self.dots_to_mm(dots))
        self._field_font_active = True
        self.backend.set_font_size(self._font_size)

    def A_named(self, *args: str) -> None:
        """^A@o,h,w,d:f.x - font by name; accepted but not resolved yet."""

        logger.debug("Font selection by name is not supported, ignoring ^A@ %s", list(args))

    def BC(self, *args: str) -> None:
        """^BCo,h,f,g,e,m - Code 128. Data arrives with ^FD and renders at ^FS.

        ``f`` and ``g`` print the interpretation line above and below the bars.
        """

        self._choice("BC", "o", _arg(args, 0), "N", ORIENTATIONS)
        self._int("BC", "h", _arg(args, 1), self.barcode_height, 1, MAX_DOTS)
        self._choice("BC", "f", _arg(args, 2), "N", YES_NO)
        self._choice("BC", "g", _arg(args, 3), "Y", YES_NO)
        self._choice("BC", "e", _arg(args, 4), "N", YES_NO)
        self._choice("BC", "m", _arg(args, 5), "N", BARCODE_MODES)

        self._state = FieldState.BARCODE_PENDING
        self.barcode_formatting = list(args)

    def BY(self, *args: str) -> None:
        """^BYw,r,h - barcode field defaults, kept until changed."""

        self.module_width = self._int("BY", "w", _arg(args, 0), self.module_width, 1, 10)

        ratio = _arg(args, 1)
        if ratio is not None:
            try:
                value = float(ratio)
            except ValueError:
                raise ArgumentFormatError("BY", "r", ratio, "a number") from None
            if value < 2.0 or value > 3.0:
                raise ArgumentRangeError(
                    "BY", "r", value, "greater than or equal to 2.0 and less than or equal to 3.0"
                )
            self.wide_ratio = value

        self.barcode_height = self._int("BY", "h", _arg(args, 2), self.barcode_height, 1, MAX_DOTS)

    def FD(self, *strings: str) -> None:
        """^FDa - field data.

        The parser splits every command on commas, but field data is a single
        argument, so the fragments are stitched back together.
        """

        string = ",".join(strings)
        if self.in_barcode:
            self.barcode_content = string
        else:
            self.backend.draw_text(string)

    def FO(self, *args: str) -> None:
        """^FOx,y - field origin relative to the label home."""

        x = self._int("FO", "x", _arg(args, 0), 0, 0, MAX_DOTS)
        y = self._int("FO", "y", _arg(args, 1), 0, 0, MAX_DOTS)

        self._set_xy(x, y)
        if self._state is FieldState.IDLE:
            self._state = FieldState.FIELD_OPEN

    def FS(self, *args: str) -> None:
        """^FS - end of field definition."""

        if self.in_barcode:
            self._render_barcode()

        self._default_font()
        self._set_xy(0, 0)
        self._state = FieldState.IDLE

    def GB(self, *args: str) -> None:
        """^GBw,h,t,c,r - box or line at the current field origin."""

        t = self._int("GB", "t", _arg(args, 2), 1, 1, MAX_DOTS)
        bound = f"greater than or equal to border thickness ({t}) and less than or equal to {MAX_DOTS}"
        w = self._int("GB", "w", _arg(args, 0), t, t, MAX_DOTS, bound)
        h = self._int("GB", "h", _arg(args, 1), t, t, MAX_DOTS, bound)
        c = Color(self._choice("GB", "c", _arg(args, 3), Color.BLACK.value, [c.value for c in Color]))
        self._int("GB", "r", _arg(args, 4), 0, 0, MAX_BOX_RADIUS)

        self.backend.draw_rect(
            self.current_field_x,
            self.current_field_y,
            self.dots_to_mm(w),
            self.dots_to_mm(h),
            self.dots_to_mm(t),
            c,
        )

    def LH(self, *args: str) -> None:
        """^LHx,y - label home, the origin every field position is relative to."""

        x = self._int("LH", "x", _arg(args, 0), 0, 0, MAX_DOTS)
        y = self._int("LH", "y", _arg(args, 1), 0, 0, MAX_DOTS)
        self.home_x = self.dots_to_mm(x)
        self.home_y = self.dots_to_mm(y)
