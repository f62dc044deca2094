"""
Shared pytest fixtures for map exchange tests.
"""

import pytest
from pathlib import Path

from map_exchange.models import BattleMap, Grid, Point, ShapeObject, TextObject, TokenObject

# Project root
PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_map():
    """A small map with one object of each kind."""
    return BattleMap(
        id="map-1",
        name="Goblin Cave",
        width=1000,
        height=800,
        grid=Grid(size=50, type="square", visible=True, snap=True, color="#666666"),
        objects=[
            TokenObject(
                id="tok-1",
                position=Point(x=100, y=150),
                width=50,
                height=50,
                name="Goblin",
                image="goblin.png",
                layer=40,
            ),
            ShapeObject(
                id="shp-1",
                position=Point(x=200, y=200),
                shape_type="rect",
                width=120,
                height=80,
                fill="#ff0000",
                stroke="#000000",
                stroke_width=2,
                layer=30,
            ),
            ShapeObject(
                id="shp-2",
                position=Point(x=400, y=300),
                shape_type="circle",
                width=60,
                height=60,
                radius=30,
                layer=30,
            ),
            ShapeObject(
                id="shp-3",
                position=Point(x=500, y=100),
                shape_type="polygon",
                width=10,
                height=10,
                points=[0, 0, 10, 0, 10, 10],
                layer=30,
            ),
            TextObject(
                id="txt-1",
                position=Point(x=20, y=30),
                text="Entrance",
                font_family="Arial",
                font_size=16,
                fill="#000000",
                layer=35,
            ),
        ],
    )


@pytest.fixture
def empty_map():
    """A map with no objects."""
    return BattleMap(id="map-empty", name="Empty", width=1920, height=1080)


@pytest.fixture
def roll20_export():
    """Minimal Roll20 campaign export with a single token graphic."""
    return {
        "pages": [
            {
                "_id": "page-1",
                "name": "Tavern",
                "width": 1920,
                "height": 1080,
                "grid_size": 50,
                "grid_opacity": 0.5,
                "graphics": [
                    {
                        "_id": "g1",
                        "_type": "graphic",
                        "left": 100,
                        "top": 100,
                        "width": 50,
                        "height": 50,
                        "rotation": 0,
                        "layer": "objects",
                        "imgsrc": "x.png",
                    }
                ],
            }
        ]
    }


@pytest.fixture
def foundry_scene():
    """Foundry v10-style scene with a token and an ellipse drawing."""
    return {
        "_id": "scene-1",
        "name": "Crypt",
        "width": 2000,
        "height": 1500,
        "background": {"src": "maps/crypt.webp"},
        "grid": {"type": 1, "size": 100, "color": "#000000", "alpha": 0.2},
        "tokens": [
            {
                "_id": "t1",
                "name": "Skeleton",
                "x": 300,
                "y": 400,
                "width": 100,
                "height": 100,
                "hidden": True,
                "locked": False,
                "texture": {"src": "tokens/skeleton.png"},
            }
        ],
        "drawings": [
            {
                "_id": "d1",
                "type": "ellipse",
                "x": 50,
                "y": 60,
                "shape": {"radius": 25},
                "strokeColor": "#ff0000",
                "strokeWidth": 3,
            }
        ],
        "walls": [],
        "lights": [],
    }


@pytest.fixture
def universal_vtt_doc():
    """Universal VTT document with a token, a polygon and a text label."""
    return {
        "format": "universal-vtt",
        "version": "1.0",
        "name": "Ruins",
        "resolution": {
            "map_origin": {"x": 0, "y": 0},
            "map_size": {"width": 1500, "height": 1000},
            "pixels_per_grid": 70,
        },
        "objects": [
            {
                "id": "o1",
                "type": "token",
                "position": {"x": 10, "y": 20},
                "layer": "40",
                "token": {"name": "Orc", "image_url": "orc.png", "size": {"width": 70, "height": 70}},
            },
            {
                "id": "o2",
                "type": "shape",
                "position": {"x": 100, "y": 100},
                "layer": "map",
                "shape": {
                    "shape_type": "polygon",
                    "points": [{"x": 0, "y": 0}, {"x": 10, "y": 0}, {"x": 10, "y": 10}],
                },
            },
            {
                "id": "o3",
                "type": "text",
                "position": {"x": 5, "y": 5},
                "layer": "35",
                "text": {"content": "Altar", "font_size": 18},
            },
        ],
    }
