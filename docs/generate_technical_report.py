"""
Generate the short technical report PDF for the Halal Restaurant Map engine.
Run from project root: python docs/generate_technical_report.py
Output: docs/technical_report.pdf
"""
import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer

from halalmap import map_settings


def add_para(story, text, style_name="Normal"):
    story.append(Paragraph(text.replace("\n", "<br/>"), styles[style_name]))


def add_bullets(story, items, style_name="Normal"):
    for item in items:
        story.append(Paragraph("&#8226; " + item.replace("\n", "<br/>"), styles[style_name]))


def settings_summary():
    """Key engine settings as report bullet lines."""
    lat, lng = map_settings.DEFAULT_CENTER
    return [
        f"Tile size: {map_settings.TILE_SIZE} px; zoom range {map_settings.ZOOM_MIN}-{map_settings.ZOOM_MAX}.",
        f"Default view: ({lat}, {lng}) at zoom {map_settings.DEFAULT_ZOOM}; detail zoom {map_settings.DETAIL_ZOOM}.",
        f"Pole guard: |lat| &lt;= {map_settings.MAX_LATITUDE:g} degrees.",
        f"Marker cull margin: {map_settings.CULL_MARGIN_PX:g} px; fetch debounce {map_settings.FETCH_DEBOUNCE_S:g} s.",
    ]


def build_report(out_path=None):
    global styles
    out_path = out_path or os.path.join(ROOT, "docs", "technical_report.pdf")
    doc = SimpleDocTemplate(
        out_path,
        pagesize=A4,
        rightMargin=2 * cm,
        leftMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=1.5 * cm,
    )
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="Body", fontSize=10, spaceAfter=6, leading=14))
    story = []

    story.append(Paragraph("Halal Restaurant Map", styles["Title"]))
    story.append(Spacer(1, 0.4 * cm))
    story.append(Paragraph(
        "Short technical report: the interactive tile-map engine behind the restaurant directory.",
        styles["Normal"],
    ))
    story.append(Spacer(1, 0.6 * cm))

    story.append(Paragraph("1. Overview", styles["Heading1"]))
    add_para(
        story,
        "The engine projects WGS84 coordinates onto a scrollable, zoomable viewport using spherical "
        "Web Mercator, computes the raster tiles needed to cover it, places restaurant pins in the same "
        "screen space and turns pointer input (drag, wheel) into viewport changes. All state lives in an "
        "explicit <i>MapState</i>; every render pass recomputes tiles and markers from it.",
        "Body",
    )
    story.append(Spacer(1, 0.3 * cm))

    story.append(Paragraph("2. Architecture (halalmap/)", styles["Heading1"]))
    add_bullets(
        story,
        [
            "<b>Projection</b> (geo/projection.py): geo_to_world / world_to_geo, pure functions.",
            "<b>Viewport</b> (geo/viewport.py): center, zoom, pixel size; clamps zoom and latitude.",
            "<b>Tiles</b> (geo/tiles.py): tile window with one tile of overscan, horizontal wrap, no vertical wrap.",
            "<b>Markers</b> (geo/markers.py): screen positions with culling; malformed coordinates dropped.",
            "<b>Interaction</b> (interaction/): pure (state, event) -> state transitions; drag from the original anchor, zoom anchored at the cursor.",
            "<b>Data</b> (data/): entity source client, debounced last-request-wins fetch coordinator.",
        ],
        "Body",
    )
    story.append(Spacer(1, 0.3 * cm))

    story.append(Paragraph("3. Settings (summary)", styles["Heading1"]))
    add_para(story, "All configurable parameters live in <i>halalmap/map_settings.py</i>.", "Body")
    add_bullets(story, settings_summary(), "Body")
    story.append(Spacer(1, 0.3 * cm))

    story.append(Paragraph("4. Validation", styles["Heading1"]))
    add_bullets(
        story,
        [
            "Invariant sweep: <i>python validation/run_invariant_checks.py</i> prints round-trip error, zoom-anchor error, pan drift and tile coverage gaps; writes outputs/tile_coverage.png.",
            "Unit tests: <i>pytest tests/ -v</i>.",
        ],
        "Body",
    )
    story.append(Spacer(1, 0.3 * cm))

    story.append(Paragraph("5. User interfaces", styles["Heading1"]))
    add_bullets(
        story,
        [
            "<b>Web service</b> (Flask): /api/restaurants, /api/restaurants/&lt;id&gt;, /api/provinces, /api/map/frame.",
            "<b>Pygame viewer</b>: tile map with pins, search and province filter, quick access list, details panel.",
        ],
        "Body",
    )

    doc.build(story)
    print("Generated:", out_path)
    return out_path


if __name__ == "__main__":
    build_report()
