# urbangen

Procedural generation of city street networks.

urbangen grows roads with L-systems, keeps them in a planar street graph,
and finds the closed areas enclosed by the roads.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `urbangen.rng`: `Random`, a 32-bit linear congruential generator.
  Generators made without a seed share one stream, reset with
  `Random.set_seed`; generators given their own seed run independently.
  `Random.double_value`, `Random.integer_value` and `Random.bool_value`
  build generators whose `generate()` returns that kind of value; calling
  `generate()` on an unconfigured generator raises `ValueError`.
- `urbangen.lsystem`: `LSystem`, a context-free string rewriting engine with
  an alphabet, an axiom and production rules. Adding a second rule for the
  same symbol makes it stochastic (`ProductionRule.choose` picks a successor
  with equal probability).
- `urbangen.graphic`: `GraphicLSystem`, an L-system read one symbol at a time
  by `read_next_symbol()`, with a drawing `Cursor` and a cursor stack
  (`[` pushes, `]` pops). When every symbol has been read it rewrites once
  more; it returns `None` when nothing new is produced.
- `urbangen.path`: `Path`, a straight segment between two points (2 or 3
  coordinates). `Path.crosses` returns a `Crossing` value and, for
  `Crossing.INTERSECTING`, the crossing point. `same_point` compares points
  within `EPSILON`.
- `urbangen.road`: `Road` and `Intersection`, the topology of the network;
  `PRIMARY_ROAD`, `SECONDARY_ROAD` and `define_new_road_type()` for road types.
- `urbangen.streetgraph`: `StreetGraph`. `add_road` keeps the graph planar: a
  new road crossing an existing one is split at the crossing, and a new end
  lying on an existing road splits that road. `check_consistence` raises
  `ValueError` if roads cross or overlap other than at their ends.
  `remove_filament_roads` removes roads with a dead end.
- `urbangen.areaextractor`: `AreaExtractor` finds the minimal cycles of a
  street graph. `extract_zones` returns each as a list of points;
  `extract_blocks` also shrinks each area by the widths of its roads (set with
  `set_road_width` / `set_road_widths` for every road type used, otherwise
  `KeyError`) and drops areas that leave their original boundary. Both take an
  optional constraint polygon (a shapely geometry or a list of points) that
  limits which intersections are used. `StreetGraph.find_zones()` is a
  shortcut for `extract_zones` without constraints.
- `urbangen.roadlsystem`: `RoadLSystem`, a graphic L-system whose `_` symbol
  draws a road into a target `StreetGraph` (`-` turns left, `+` turns right).
  New roads are clipped to the area constraints, cut at crossings and snapped
  to nearby intersections or roads within the snap distance; roads shorter
  than 100 units are dropped.
- `urbangen.patterns`: `RasterRoadPattern` (90 degree turns) and
  `OrganicRoadPattern` (turns between 60 and 90 degrees).

## Examples

An L-system:

```python
from urbangen.lsystem import LSystem

algae = LSystem()
algae.set_alphabet("AB")
algae.set_axiom("A")
algae.add_rule("A", "AB")
algae.add_rule("B", "A")
algae.do_iterations(3)
print(algae.produced_string())  # ABAAB
```

A street graph with a single closed loop:

```python
from urbangen.path import Path
from urbangen.streetgraph import StreetGraph
from urbangen.areaextractor import AreaExtractor

graph = StreetGraph()
graph.add_road(Path((-100, 100), (100, 100)))
graph.add_road(Path((100, 100), (100, -100)))
graph.add_road(Path((100, -100), (-100, -100)))
graph.add_road(Path((-100, -100), (-100, 100)))

zones = AreaExtractor().extract_zones(graph)
print(len(zones))  # 1
```

Growing a raster street pattern:

```python
from urbangen.patterns import RasterRoadPattern
from urbangen.streetgraph import StreetGraph

area = [(-1000, -1000), (1000, -1000), (1000, 1000), (-1000, 1000)]

graph = StreetGraph()
pattern = RasterRoadPattern()
pattern.set_target(graph)
pattern.set_area_constraints(area)
pattern.set_road_length(100, 120)
pattern.set_snap_distance(30)
pattern.generate_roads(50)
print(len(graph))
```

Generation is deterministic: with the same shared seed (`Random.set_seed`)
and the same settings, the same network is grown.

## What the package does not do

urbangen produces roads, intersections and area outlines only. Zones and
blocks are returned as plain lists of points; there are no zone, block, lot
or building objects, no subdivision of blocks into lots, and no general
polygon or shape geometry beyond what `Path` and shapely provide. There is no
command-line tool, no rendering and no export to files.