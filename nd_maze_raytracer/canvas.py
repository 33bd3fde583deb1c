#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/canvas.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

class Canvas:
    """
    Dot canvas for the top-down map. Each terminal cell holds a 2x4 block
    of dots packed into an 8-bit mask, plus one colour index per cell.
    """
    __slots__ = ['w', 'h', 'grid', 'c_grid']

    # Braille dot mapping for 2x4 grid
    #  1 4
    #  2 5
    #  3 6
    #  7 8
    BRAILLE_REMAP = [0x01, 0x02, 0x04, 0x40, 0x08, 0x10, 0x20, 0x80]

    def __init__(self, w, h):
        self.w, self.h = w, h
        self.grid = [[0] * (w // 2 + 1) for _ in range(h // 4 + 1)]
        self.c_grid = [[None] * (w // 2 + 1) for _ in range(h // 4 + 1)]

    def set_pixel(self, x, y, color_idx):
        if x < 0 or x >= self.w or y < 0 or y >= self.h: return
        cx, cy = x >> 1, y >> 2
        # Bit index 0-3 for the left column, 4-7 for the right
        self.grid[cy][cx] |= (1 << ((y & 3) + (x & 1) * 4))
        # Lower index is brighter; brightest dot decides the cell colour
        current = self.c_grid[cy][cx]
        if current is None or color_idx < current:
            self.c_grid[cy][cx] = color_idx

    def cells(self):
        """Yield (row, col, mask, color_idx) for every non-empty cell."""
        for y, (row, colors) in enumerate(zip(self.grid, self.c_grid)):
            for x, mask in enumerate(row):
                if mask:
                    yield y, x, mask, colors[x]


def render_cell_ascii(mask: int) -> str:
    """Density character for a 2x4 cell mask, used when Braille is unavailable."""
    if not mask:
        return ' '
    density = bin(mask).count('1')
    chars = " .:-=+*#%@"
    return chars[density] if density < len(chars) else '@'


def render_cell_braille(mask: int) -> str:
    """Renders a 2x4 cell mask as a Unicode Braille character."""
    if not mask:
        return ' '
    b = sum(Canvas.BRAILLE_REMAP[i] for i in range(8) if mask & (1 << i))
    return chr(0x2800 + b)
