"""Orthogonal tile maps read from Tiled XML files."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple, Optional

from platformkit.module import Module

log = logging.getLogger(__name__)

PLATFORM_GROUP_ID = 8
STAIRS_GROUP_ID = 10
DEFAULT_BLOCKED_GID = 1

# Tiles drawn around the player: a fixed tile size and a margin on each side.
_VISIBLE_TILE_SIZE = 16
_VISIBLE_MARGIN = 30

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _as_int(value: Optional[str]) -> int:
    """The leading integer of an attribute value, 0 when there is none."""
    if value is None:
        return 0
    match = _INT_PREFIX.match(value)
    return int(match.group(1)) if match else 0


def _as_float(value: Optional[str], default: float = 0.0) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return 0.0


def _as_bool(value: Optional[str]) -> bool:
    """True when the value starts with 1, t, T, y or Y."""
    if value is None:
        return False
    text = value.strip()
    return bool(text) and text[0] in "1tTyY"


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _trunc_mod(a: int, b: int) -> int:
    """Remainder matching division toward zero."""
    return a - b * _trunc_div(a, b)


class MapType(Enum):
    """The orientation of a map."""

    UNKNOWN = 0
    ORTHOGONAL = 1
    ISOMETRIC = 2
    STAGGERED = 3


@dataclass
class Properties:
    """Named boolean properties, looked up by first match."""

    items: list[tuple[str, bool]] = field(default_factory=list)

    def get(self, name: str) -> Optional[bool]:
        """The value of property ``name``, or None when it is not set."""
        return next((value for key, value in self.items if key == name), None)

    @classmethod
    def _from_node(cls, node: ET.Element) -> "Properties":
        holder = node.find("properties")
        if holder is None:
            return cls()
        return cls(
            [(prop.get("name", ""), _as_bool(prop.get("value"))) for prop in holder.findall("property")]
        )


@dataclass
class TileSet:
    """A sheet of equally sized tiles whose ids start at ``firstgid``."""

    name: str = ""
    firstgid: int = 0
    margin: int = 0
    spacing: int = 0
    tile_width: int = 0
    tile_height: int = 0
    columns: int = 0
    tilecount: int = 0
    image: str = ""
    texture_path: str = ""

    def tile_rect(self, gid: int) -> tuple[int, int, int, int]:
        """The ``(x, y, w, h)`` of tile ``gid`` inside the sheet image."""
        if self.columns <= 0:
            raise ValueError(f"tileset {self.name!r} has no columns")
        relative = gid - self.firstgid
        step = self.tile_width + self.spacing
        x = self.margin + step * _trunc_mod(relative, self.columns)
        y = self.margin + step * _trunc_div(relative, self.columns)
        return x, y, self.tile_width, self.tile_height


@dataclass
class MapLayer:
    """A grid of tile ids stored row by row."""

    name: str = ""
    id: int = 0
    width: int = 0
    height: int = 0
    parallax: float = 1.0
    data: list[int] = field(default_factory=list)
    properties: Properties = field(default_factory=Properties)

    def get(self, x: int, y: int) -> int:
        """The tile id at column ``x``, row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"tile ({x}, {y}) outside a {self.width}x{self.height} layer")
        return self.data[y * self.width + x]


@dataclass
class MapObject:
    """A rectangle placed in an object group."""

    id: int = 0
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


@dataclass
class ObjectGroup:
    """A named group of map objects."""

    name: str = ""
    id: int = 0
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    objects: list[MapObject] = field(default_factory=list)
    properties: Properties = field(default_factory=Properties)


@dataclass
class MapData:
    """Everything read from a map file."""

    width: int = 0
    height: int = 0
    tile_width: int = 0
    tile_height: int = 0
    type: MapType = MapType.UNKNOWN
    tilesets: list[TileSet] = field(default_factory=list)
    layers: list[MapLayer] = field(default_factory=list)
    object_groups: list[ObjectGroup] = field(default_factory=list)

    def tileset_for_gid(self, gid: int) -> Optional[TileSet]:
        """The first tileset whose range reaches past ``gid``, else the last one."""
        chosen: Optional[TileSet] = None
        for tileset in self.tilesets:
            chosen = tileset
            if gid < tileset.firstgid + tileset.tilecount:
                break
        return chosen

    def navigation_layer(self) -> Optional[MapLayer]:
        """The first layer marked ``Navigation``, else the first layer."""
        marked = next((layer for layer in self.layers if layer.properties.get("Navigation")), None)
        if marked is not None:
            return marked
        return self.layers[0] if self.layers else None


class _Collider(NamedTuple):
    """A static body to create: centre position, size and whether it only senses."""

    kind: str
    x: int
    y: int
    width: int
    height: int
    sensor: bool


class _TileDraw(NamedTuple):
    """One tile to draw at a world position."""

    tileset: TileSet
    x: int
    y: int
    rect: tuple[int, int, int, int]
    parallax: float


def _parse_tileset(node: ET.Element) -> TileSet:
    image = node.find("image")
    return TileSet(
        name=node.get("name", ""),
        firstgid=_as_int(node.get("firstgid")),
        margin=_as_int(node.get("margin")),
        spacing=_as_int(node.get("spacing")),
        tile_width=_as_int(node.get("tilewidth")),
        tile_height=_as_int(node.get("tileheight")),
        columns=_as_int(node.get("columns")),
        tilecount=_as_int(node.get("tilecount")),
        image=image.get("source", "") if image is not None else "",
    )


def _parse_layer(node: ET.Element) -> MapLayer:
    width = _as_int(node.get("width"))
    height = _as_int(node.get("height"))
    data = [0] * max(width * height, 0)
    holder = node.find("data")
    if holder is not None:
        for index, tile in zip(range(len(data)), holder.findall("tile")):
            data[index] = _as_int(tile.get("gid"))
    return MapLayer(
        name=node.get("name", ""),
        id=_as_int(node.get("id")),
        width=width,
        height=height,
        parallax=_as_float(node.get("parallaxx"), 1.0),
        data=data,
        properties=Properties._from_node(node),
    )


def _parse_object_group(node: ET.Element) -> ObjectGroup:
    return ObjectGroup(
        name=node.get("name", ""),
        id=_as_int(node.get("id")),
        x=_as_int(node.get("x")),
        y=_as_int(node.get("y")),
        width=_as_int(node.get("width")),
        height=_as_int(node.get("height")),
        objects=[
            MapObject(
                id=_as_int(obj.get("id")),
                x=_as_int(obj.get("x")),
                y=_as_int(obj.get("y")),
                width=_as_int(obj.get("width")),
                height=_as_int(obj.get("height")),
            )
            for obj in node.findall("object")
        ],
        properties=Properties._from_node(node),
    )


def parse_map(path: str) -> MapData:
    """Read a map file; OSError if it cannot be read, ValueError if it is not a map."""
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as error:
        raise ValueError(f"could not parse map file {path}: {error}") from error
    if root.tag != "map":
        raise ValueError(f"{path}: cannot find 'map' tag")
    return MapData(
        width=_as_int(root.get("width")),
        height=_as_int(root.get("height")),
        tile_width=_as_int(root.get("tilewidth")),
        tile_height=_as_int(root.get("tileheight")),
        type=MapType.UNKNOWN,
        tilesets=[_parse_tileset(node) for node in root.findall("tileset")],
        layers=[_parse_layer(node) for node in root.findall("layer")],
        object_groups=[_parse_object_group(node) for node in root.findall("objectgroup")],
    )


def _colliders(data: MapData) -> list[_Collider]:
    found = []
    for group in data.object_groups:
        if group.id == PLATFORM_GROUP_ID:
            kind, sensor = "platform", False
        elif group.id == STAIRS_GROUP_ID:
            kind, sensor = "stairs", True
        else:
            continue
        for obj in group.objects:
            found.append(
                _Collider(
                    kind,
                    obj.x + obj.width // 2,
                    obj.y + obj.height // 2,
                    obj.width,
                    obj.height,
                    sensor,
                )
            )
    return found


class TileMap(Module):
    """Loads a map, builds its navigation grid and lists the tiles to draw."""

    def __init__(self, start_enabled: bool = False, directory: str = "", filename: str = "") -> None:
        super().__init__("map", start_enabled)
        self.directory = directory
        self.filename = filename
        self.data = MapData()
        self.map_loaded = False
        self.navigation_layer: Optional[MapLayer] = None
        self.blocked_gid = DEFAULT_BLOCKED_GID
        self.colliders: list[_Collider] = []
        self.navigation: Optional[tuple[int, int, bytearray]] = None

    def start(self) -> bool:
        """Load the configured map file and build its navigation grid."""
        try:
            self.load(self.directory + self.filename)
        except (OSError, ValueError) as error:
            log.error("Could not load map: %s", error)
            return False
        if self.navigation_layer is not None:
            self.navigation = self.navigation_map()
        return True

    def load(self, path: str) -> MapData:
        """Read ``path`` and make it the current map."""
        data = parse_map(path)
        for tileset in data.tilesets:
            tileset.texture_path = self.directory + tileset.image
        self.data = data
        self.colliders = _colliders(data)
        self.navigation_layer = data.navigation_layer()
        self.map_loaded = True
        log.debug("Loaded map %s: %dx%d", path, data.width, data.height)
        return data

    def update(self, dt: float) -> bool:
        """False until a map has been loaded."""
        return self.map_loaded

    def map_to_world(self, x: int, y: int) -> tuple[int, int]:
        """The world position of the top-left corner of tile ``(x, y)``."""
        return x * self.data.tile_width, y * self.data.tile_height

    def world_to_map(self, x: int, y: int) -> tuple[int, int]:
        """The tile holding world position ``(x, y)``, rounding toward zero."""
        if self.data.tile_width == 0 or self.data.tile_height == 0:
            raise ValueError("no map loaded")
        return _trunc_div(x, self.data.tile_width), _trunc_div(y, self.data.tile_height)

    def navigation_map(self) -> tuple[int, int, bytearray]:
        """``(width, height, cells)``: 0 where the navigation layer is blocked, else 1."""
        layer = self.navigation_layer
        if layer is None:
            raise ValueError("the map has no navigation layer")
        cells = bytearray([1]) * (layer.width * layer.height)
        for y in range(min(self.data.height, layer.height)):
            for x in range(min(self.data.width, layer.width)):
                cells[y * layer.width + x] = 0 if layer.get(x, y) == self.blocked_gid else 1
        return self.data.width, self.data.height, cells

    def tiles_to_draw(self, player_x: int) -> Iterator[_TileDraw]:
        """The tiles of drawable layers, near the player unless the layer is parallax."""
        player_column = _trunc_div(player_x, _VISIBLE_TILE_SIZE)
        for layer in self.data.layers:
            parallax = layer.properties.get("Parallax")
            if parallax:
                columns = range(layer.width)
                factor = layer.parallax
            elif layer.properties.get("Draw"):
                columns = range(
                    max(player_column - _VISIBLE_MARGIN, 0),
                    min(player_column + _VISIBLE_MARGIN, layer.width),
                )
                factor = 1.0
            else:
                continue
            for x in columns:
                for y in range(layer.height):
                    gid = layer.get(x, y)
                    if gid == 0:
                        continue  # empty cell
                    tileset = self.data.tileset_for_gid(gid)
                    if tileset is None:
                        continue
                    world_x, world_y = self.map_to_world(x, y)
                    yield _TileDraw(tileset, world_x, world_y, tileset.tile_rect(gid), factor)

    def clean_up(self) -> bool:
        """Forget the loaded map."""
        log.debug("Unloading map")
        self.data = MapData()
        self.colliders = []
        self.navigation_layer = None
        self.navigation = None
        self.map_loaded = False
        return True