from pullcore.parser import parse_level_str
from pullcore.zones import partition_zones, zone_id, zone_labels, zone_mask, zone_touches_box

# goal layout (boxes on both goals) cuts the corridor in two
TWO_ZONES = """
########
#  . $@#
#  . $ #
########
"""

LVL = """
#####
#@  #
# $ #
# . #
#####
"""


def test_partition_covers_free_floor_once():
    b = parse_level_str(TWO_ZONES)
    for boxes in (b.goals, b.boxes, (1 << 12) | (1 << 19)):
        zones = partition_zones(b, boxes)
        union = 0
        for zid, mask in zones.items():
            assert union & mask == 0
            assert zone_id(mask) == zid
            union |= mask
        assert union == b.floor & ~boxes


def test_goal_layout_has_two_zones():
    b = parse_level_str(TWO_ZONES)
    zones = partition_zones(b, b.goals)
    assert list(zones) == [9, 12]
    assert zones[9] == (1 << 9) | (1 << 10) | (1 << 17) | (1 << 18)
    assert all(zone_touches_box(b, b.goals, m) for m in zones.values())


def test_zone_id_is_canonical():
    b = parse_level_str(TWO_ZONES)
    # same region seen from different cells gets the same id
    ids = {zone_id(zone_mask(b, b.goals, start)) for start in (12, 14, 20, 22)}
    assert ids == {12}
    labels = zone_labels(b, b.goals)
    assert labels[18] == 9 and labels[22] == 12
    assert 11 not in labels


def test_enclosed_cell_is_its_own_zone():
    b = parse_level_str(LVL)
    boxes = (1 << 7) | (1 << 11)
    zones = partition_zones(b, boxes)
    assert zones[6] == 1 << 6
    assert zone_touches_box(b, boxes, zones[6])
    assert not zone_touches_box(b, 0, zones[6])


def test_zone_mask_on_blocked_cell_is_empty():
    b = parse_level_str(LVL)
    assert zone_mask(b, b.boxes, 12) == 0
    assert zone_mask(b, b.boxes, 0) == 0
    assert zone_id(0) == -1
