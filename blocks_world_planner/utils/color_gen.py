import colorsys


def generate_block_colors(n, alpha=1.0):
    """
    Generate `n` pastel RGBA colors, one per block id.

    Hues are spaced evenly but never wrap back to red: block i (0-based) gets
    hue (i + 1) / (n + 1), so the first and last blocks stay distinguishable.
    """
    colors = []
    for i in range(n):
        hue = (i + 1) / (n + 1)
        r, g, b = colorsys.hls_to_rgb(hue, 0.8, 0.8)
        colors.append([r, g, b, alpha])
    return colors


def to_uint8_rgb(color):
    """Convert a float RGBA color to an 8-bit RGB triple."""
    return [int(round(c * 255)) for c in color[:3]]
