from label_protocol import RenderingBackend


class TraceBackend(RenderingBackend):
    """Mock backend that prints one line per drawing primitive."""

    def __init__(self, echo: bool = True) -> None:
        super().__init__()
        self.echo = echo
        self.sent: list[str] = []

    def _send(self, line: str) -> None:
        self.sent.append(line)
        if self.echo:
            print(line)

    def create_document(self, width_mm, height_mm):
        self.width_mm, self.height_mm = width_mm, height_mm
        self._send(f"[PAGE] {width_mm:.2f}x{height_mm:.2f}mm")

    def move_cursor(self, x_mm, y_mm):
        self.cursor_x, self.cursor_y = x_mm, y_mm
        self._send(f"[MOVE] {x_mm:.2f},{y_mm:.2f}")

    def set_font_size(self, points):
        self._send(f"[FONT] {points:.3f}pt")

    def draw_text(self, text):
        self._send(f"[TEXT] {text}")

    def draw_rect(self, x_mm, y_mm, width_mm, height_mm, thickness_mm, stroke_color):
        self._send(
            f"[RECT] {x_mm:.2f},{y_mm:.2f} {width_mm:.2f}x{height_mm:.2f} "
            f"t={thickness_mm:.2f} c={stroke_color.value}"
        )

    def draw_barcode(self, content, formatting):
        self._send(f"[BARCODE] {formatting.symbology} '{content}' {formatting.orientation} h={formatting.height_mm:.2f}")

    def serialize(self):
        return ("\n".join(self.sent) + "\n").encode("utf-8")
