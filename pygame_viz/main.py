"""
Pygame restaurant map: tile map with pins, drag to pan, wheel to zoom at the cursor,
search/province filter, quick-access list and a details panel for the selected restaurant.
Run from project root with the web service running: python pygame_viz/main.py
"""
import logging
import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pygame

from halalmap.data.entity_source import EntityQuery, fetch_entities
from halalmap.data.fetch_coordinator import BackgroundFetcher, FetchCoordinator
from halalmap.frame import build_frame
from halalmap.geo.markers import marker_at
from halalmap.geo.viewport import Viewport
from halalmap.interaction import events as ev
from halalmap.interaction.controller import handle_event
from halalmap.interaction.state import MapState
from halalmap.map_settings import API_URL, PROVINCES
from pygame_viz import config as ui
from pygame_viz.map_view import MapView

log = logging.getLogger(__name__)

# Layout
MAP_WIDTH = 900
PANEL_WIDTH = 320
WIN_H = 700
FPS = 60
FONT_SIZE = 18
CONTROL_SIZE = 30


def map_controls(map_width):
    """Zoom in / zoom out / reset buttons in the map's top-right corner (map coords)."""
    x = map_width - CONTROL_SIZE - 12
    return [
        ("zoom_in", pygame.Rect(x, 12, CONTROL_SIZE, CONTROL_SIZE)),
        ("zoom_out", pygame.Rect(x, 12 + CONTROL_SIZE + 6, CONTROL_SIZE, CONTROL_SIZE)),
        ("reset", pygame.Rect(x, 12 + 2 * (CONTROL_SIZE + 6), CONTROL_SIZE, CONTROL_SIZE)),
    ]


CONTROL_EVENTS = {"zoom_in": ev.ZoomIn(), "zoom_out": ev.ZoomOut(), "reset": ev.ResetView()}
CONTROL_LABELS = {"zoom_in": "+", "zoom_out": "-", "reset": "o"}


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    map_width = MAP_WIDTH
    win_h = WIN_H
    screen = pygame.display.set_mode((map_width + PANEL_WIDTH, win_h), pygame.RESIZABLE)
    pygame.display.set_caption("Halal Restaurant Map")
    font = pygame.font.Font(None, FONT_SIZE)
    big_font = pygame.font.Font(None, FONT_SIZE + 8)
    clock = pygame.time.Clock()

    state = MapState(viewport=Viewport(width_px=map_width, height_px=win_h))
    map_view = MapView()
    coordinator = FetchCoordinator()
    fetcher = BackgroundFetcher(lambda q: fetch_entities(q, base_url=API_URL))

    search_text = ""
    search_active = False
    province_idx = 0

    def current_query():
        return EntityQuery(province=PROVINCES[province_idx], search=search_text)

    coordinator.schedule(current_query(), delay=0.0)

    def dispatch(event):
        nonlocal state
        state = handle_event(state, event)

    def draw_panel(surf, frame, entities_by_id):
        """Draw the side panel. Returns list of (name, rect) buttons in panel coords."""
        surf.fill(ui.PANEL_BG)
        buttons = []
        y = 10
        surf.blit(big_font.render("Halal Restaurants", True, ui.TEXT), (10, y))
        y += 30

        r_search = pygame.Rect(10, y, PANEL_WIDTH - 20, 26)
        pygame.draw.rect(surf, (50, 52, 56), r_search)
        pygame.draw.rect(surf, ui.BUTTON_ACTIVE if search_active else (100, 102, 106), r_search, 1)
        label = search_text or "Search restaurants, locations, cuisines..."
        colour = ui.TEXT if search_text else ui.TEXT_DIM
        surf.blit(font.render(label[:40], True, colour), (r_search.x + 6, r_search.y + 6))
        buttons.append(("search", r_search))
        y += 32

        r_prov = pygame.Rect(10, y, PANEL_WIDTH - 20, 26)
        pygame.draw.rect(surf, ui.BUTTON, r_prov)
        surf.blit(font.render(f"Province: {PROVINCES[province_idx]}", True, ui.TEXT), (r_prov.x + 6, r_prov.y + 6))
        buttons.append(("province", r_prov))
        y += 36

        if coordinator.loading:
            surf.blit(font.render("Loading restaurants...", True, ui.TEXT_DIM), (10, y))
            y += 22
        if coordinator.error:
            surf.blit(font.render(coordinator.error[:44], True, ui.ERROR_TEXT), (10, y))
            y += 20
            r_retry = pygame.Rect(10, y, 80, 24)
            pygame.draw.rect(surf, ui.BUTTON, r_retry)
            surf.blit(font.render("Retry", True, ui.TEXT), (r_retry.x + 18, r_retry.y + 5))
            buttons.append(("retry", r_retry))
            y += 32

        counts = frame.counts
        surf.blit(font.render(
            f"Showing {counts.get('total', 0)} restaurants  "
            f"(verified {counts.get('verified', 0)}, pending {counts.get('pending', 0)})",
            True, ui.TEXT_DIM), (10, y))
        y += 26

        focused = entities_by_id.get(frame.selection.focused_id)
        if focused is not None:
            surf.blit(big_font.render(focused.name[:26], True, ui.TEXT), (10, y))
            r_close = pygame.Rect(PANEL_WIDTH - 34, y, 24, 22)
            pygame.draw.rect(surf, ui.BUTTON, r_close)
            surf.blit(font.render("x", True, ui.TEXT), (r_close.x + 8, r_close.y + 4))
            buttons.append(("close", r_close))
            y += 26
            lines = [
                f"{focused.address}",
                f"{focused.province}",
                "Verified Halal" if focused.verified else "Verification pending",
                f"Rating {focused.rating}  |  {focused.cuisine}",
                f"Certificate {focused.details.get('certificationId', '-')}",
                f"Authority {focused.details.get('issuingAuthority', '-')}",
                f"Valid until {focused.details.get('expiryDate', '-')}",
            ]
            for line in lines:
                surf.blit(font.render(line[:44], True, ui.TEXT_DIM), (10, y))
                y += 18
            y += 12
        else:
            surf.blit(font.render("Click a pin to view restaurant details", True, ui.TEXT_DIM), (10, y))
            y += 28

        surf.blit(font.render("Quick access", True, ui.TEXT), (10, y))
        y += 22
        for entity_id in frame.quick_access:
            entity = entities_by_id.get(entity_id)
            if entity is None:
                continue
            r = pygame.Rect(10, y, PANEL_WIDTH - 20, 34)
            pygame.draw.rect(surf, (50, 52, 56), r)
            surf.blit(font.render(entity.name[:40], True, ui.TEXT), (r.x + 6, r.y + 4))
            surf.blit(font.render(entity.address[:44], True, ui.TEXT_DIM), (r.x + 6, r.y + 18))
            buttons.append((f"entity:{entity_id}", r))
            y += 38
        return buttons

    running = True
    panel_buttons = []
    frame = None

    while running:
        entities = coordinator.entities
        entities_by_id = {e.id: e for e in entities}
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
                break
            if e.type == pygame.VIDEORESIZE:
                new_w, new_h = e.w, e.h
                if new_w > PANEL_WIDTH and new_h > 100:
                    map_width = new_w - PANEL_WIDTH
                    win_h = new_h
                    screen = pygame.display.set_mode((new_w, new_h), pygame.RESIZABLE)
                    dispatch(ev.Resize(map_width, win_h))
            if e.type == getattr(pygame, "WINDOWLEAVE", None):
                dispatch(ev.PointerLeave())
            if e.type == pygame.KEYDOWN:
                if search_active:
                    if e.key == pygame.K_BACKSPACE:
                        search_text = search_text[:-1]
                    elif e.key in (pygame.K_RETURN, pygame.K_ESCAPE):
                        search_active = False
                    elif e.unicode and e.unicode.isprintable():
                        search_text += e.unicode
                    coordinator.schedule(current_query())
                elif e.key == pygame.K_ESCAPE:
                    dispatch(ev.ClearFocus())
            if e.type == pygame.MOUSEBUTTONDOWN:
                x, y = e.pos
                map_x, map_y = x - PANEL_WIDTH, y
                if x < PANEL_WIDTH:
                    if e.button != 1:
                        continue
                    search_active = False
                    for name, r in panel_buttons:
                        if not r.collidepoint(x, y):
                            continue
                        if name == "search":
                            search_active = True
                        elif name == "province":
                            province_idx = (province_idx + 1) % len(PROVINCES)
                            coordinator.schedule(current_query())
                        elif name == "retry":
                            coordinator.retry()
                        elif name == "close":
                            dispatch(ev.ClearFocus())
                        elif name.startswith("entity:"):
                            entity = entities_by_id.get(name.split(":", 1)[1])
                            if entity is not None:
                                dispatch(ev.MarkerClick(entity))
                        break
                elif e.button == 1:
                    search_active = False
                    control = next((n for n, r in map_controls(map_width) if r.collidepoint(map_x, map_y)), None)
                    if control is not None:
                        dispatch(CONTROL_EVENTS[control])
                        continue
                    hit = marker_at(frame.markers, map_x, map_y) if frame else None
                    if hit is not None and hit.entity_id in entities_by_id:
                        dispatch(ev.MarkerClick(entities_by_id[hit.entity_id]))
                    else:
                        dispatch(ev.PointerDown(map_x, map_y))
                elif e.button == 4:
                    dispatch(ev.Wheel(map_x, map_y, -1))
                elif e.button == 5:
                    dispatch(ev.Wheel(map_x, map_y, 1))
            if e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                dispatch(ev.PointerUp())
            if e.type == pygame.MOUSEMOTION:
                x, y = e.pos
                map_x, map_y = x - PANEL_WIDTH, y
                if x < PANEL_WIDTH:
                    dispatch(ev.PointerLeave())
                    dispatch(ev.Hover(None))
                    continue
                dispatch(ev.PointerMove(map_x, map_y))
                if state.drag is None and frame is not None:
                    hit = marker_at(frame.markers, map_x, map_y)
                    dispatch(ev.Hover(hit.entity_id if hit else None))

        ticket = coordinator.poll()
        if ticket is not None:
            fetcher.submit(ticket)
        fetcher.drain(coordinator)

        entities = coordinator.entities
        entities_by_id = {en.id: en for en in entities}
        frame = build_frame(state, entities)

        screen.fill(ui.PANEL_BG)
        map_surf = screen.subsurface(pygame.Rect(PANEL_WIDTH, 0, map_width, win_h))
        map_surf.fill(ui.BACKGROUND)
        map_view.draw(map_surf, frame)
        for name, r in map_controls(map_width):
            pygame.draw.rect(map_surf, ui.BUTTON, r)
            map_surf.blit(font.render(CONTROL_LABELS[name], True, ui.TEXT), (r.x + 11, r.y + 8))
        map_surf.blit(font.render(f"Zoom: {frame.zoom}x", True, ui.TEXT), (12, win_h - 24))

        hovered = entities_by_id.get(frame.selection.hovered_id)
        if hovered is not None and hovered.id != frame.selection.focused_id:
            m = frame.marker_for(hovered.id)
            if m is not None and m.visible:
                tip = font.render(f"{hovered.name} - {hovered.cuisine}", True, ui.TEXT)
                map_surf.blit(tip, (int(m.x) + 16, int(m.y) - 8))

        panel_surf = screen.subsurface(pygame.Rect(0, 0, PANEL_WIDTH, win_h))
        panel_buttons = draw_panel(panel_surf, frame, entities_by_id)
        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()


if __name__ == "__main__":
    main()
