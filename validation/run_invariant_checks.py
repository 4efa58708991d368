"""
Validation: randomized sweep of the map engine invariants.
Round-trip projection error, tile coverage of the viewport, zoom-anchor drift and
pan drift over many random viewports. Run from project root with PYTHONPATH set.
Optionally writes outputs/tile_coverage.png showing the tile layout of one viewport.
"""
import os
import random
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

SIZES = [(800, 500), (801, 533), (1024, 768), (333, 257), (1920, 1080)]


def _covered(tiles, x, y, tile_size):
    for t in tiles:
        if t.screen_x <= x < t.screen_x + tile_size and t.screen_y <= y < t.screen_y + tile_size:
            return True
    return False


def coverage_gaps(viewport, step=37):
    """Sample points of the viewport (inside the world vertically) not covered by any tile."""
    from halalmap.geo.projection import world_size
    from halalmap.geo.tiles import compute_tile_grid

    tiles = compute_tile_grid(viewport)
    ts = viewport.tile_size
    c = viewport.center_world()
    world_top = viewport.height_px / 2.0 - c.y
    world_bottom = world_top + world_size(viewport.zoom, ts)
    w, h = viewport.width_px, viewport.height_px
    xs = [float(x) for x in range(0, int(w), step)] + [w - 0.5]
    ys = [float(y) for y in range(0, int(h), step)] + [h - 0.5]
    gaps = []
    for y in ys:
        if not (world_top <= y < world_bottom):
            continue
        for x in xs:
            if not _covered(tiles, x, y, ts):
                gaps.append((x, y))
    return gaps


def plot_tiles(viewport, path):
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from matplotlib.patches import Rectangle
    from halalmap.geo.tiles import compute_tile_grid

    tiles = compute_tile_grid(viewport)
    ts = viewport.tile_size
    fig, ax = plt.subplots(figsize=(8, 6))
    for t in tiles:
        ax.add_patch(Rectangle((t.screen_x, t.screen_y), ts, ts, fill=False, edgecolor="gray"))
        ax.text(t.screen_x + 4, t.screen_y + 14, f"{t.tile_x},{t.tile_y}", fontsize=7)
    ax.add_patch(Rectangle((0, 0), viewport.width_px, viewport.height_px, fill=False, edgecolor="red", lw=2))
    ax.set_xlim(-ts * 1.2, viewport.width_px + ts * 1.2)
    ax.set_ylim(viewport.height_px + ts * 1.2, -ts * 1.2)
    ax.set_aspect("equal")
    ax.set_title(f"Tile grid z={viewport.zoom} ({int(viewport.width_px)}x{int(viewport.height_px)})")
    os.makedirs(os.path.dirname(path), exist_ok=True)
    fig.savefig(path, dpi=100)
    plt.close(fig)
    return path


def main(num_samples=200, seed=123, plot_path=None):
    from halalmap.geo.projection import GeoPoint, geo_to_world, world_to_geo
    from halalmap.geo.viewport import Viewport
    from halalmap.interaction import events as ev
    from halalmap.interaction.controller import handle_event
    from halalmap.interaction.state import MapState

    rng = random.Random(seed)
    max_roundtrip = 0.0
    max_anchor = 0.0
    max_pan = 0.0
    gap_count = 0
    for _ in range(num_samples):
        zoom = rng.randint(3, 15)
        p = GeoPoint(rng.uniform(-85, 85), rng.uniform(-179.999, 180))
        q = world_to_geo(geo_to_world(p, zoom), zoom)
        max_roundtrip = max(max_roundtrip, abs(q.lat - p.lat), abs(q.lng - p.lng))

        w, h = rng.choice(SIZES)
        vp = Viewport(GeoPoint(rng.uniform(-60, 60), rng.uniform(-180, 180)), zoom, w, h)
        gap_count += len(coverage_gaps(vp))

        state = MapState(viewport=vp)
        x, y = rng.uniform(0, w), rng.uniform(0, h)
        before = vp.screen_to_geo(x, y)
        after = handle_event(state, ev.Wheel(x, y, rng.choice([-1, 1])))
        sx, sy = after.viewport.geo_to_screen(before)
        max_anchor = max(max_anchor, abs(sx - x), abs(sy - y))

        dx, dy = rng.uniform(-300, 300), rng.uniform(-300, 300)
        one = handle_event(handle_event(state, ev.PointerDown(100, 100)), ev.PointerMove(100 + dx, 100 + dy))
        many = handle_event(state, ev.PointerDown(100, 100))
        for i in range(1, 21):
            many = handle_event(many, ev.PointerMove(100 + dx * i / 20, 100 + dy * i / 20))
        max_pan = max(max_pan, abs(one.viewport.center.lat - many.viewport.center.lat),
                      abs(one.viewport.center.lng - many.viewport.center.lng))

    result = {
        "samples": num_samples,
        "max_roundtrip_error_deg": max_roundtrip,
        "max_zoom_anchor_error_px": max_anchor,
        "max_pan_drift_deg": max_pan,
        "coverage_gaps": gap_count,
    }
    print(f"Map engine invariant sweep ({num_samples} samples, seed={seed})")
    print(f"  Round-trip error: {max_roundtrip:.2e} deg")
    print(f"  Zoom anchor error: {max_anchor:.3f} px")
    print(f"  Pan drift: {max_pan:.2e} deg")
    print(f"  Coverage gaps: {gap_count}")
    if plot_path:
        result["plot"] = plot_tiles(Viewport(GeoPoint(-2.5, 118.0), 5, 801, 533), plot_path)
    return result


if __name__ == "__main__":
    main(plot_path=os.path.join(ROOT, "outputs", "tile_coverage.png"))
