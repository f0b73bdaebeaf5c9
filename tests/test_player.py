from ulanrpg.components import AIType, Monster, Player, Position
from ulanrpg.player import direction_for_key, move_player
from ulanrpg.state import Color, MessageLog
from ulanrpg.world import World


def _world_with_player(x=0, y=0, level=0):
    world = World()
    pid = world.spawn(player=Player(), name="Player", position=Position(x, y, level))
    return world, pid


def test_direction_keys_match_wasd_and_arrows():
    assert direction_for_key("w") == (0, 1)
    assert direction_for_key("s") == (0, -1)
    assert direction_for_key("a") == (-1, 0)
    assert direction_for_key("d") == (1, 0)
    assert direction_for_key("up") == direction_for_key("W")
    assert direction_for_key("left") == direction_for_key("a")


def test_unknown_key_has_no_direction():
    assert direction_for_key("q") is None


def test_free_move_updates_position():
    world, pid = _world_with_player()
    log = MessageLog()
    assert move_player(world, log, 1, 0) is None
    assert world.get(pid).position == Position(1, 0, 0)
    assert log.messages == []


def test_moves_accumulate_and_return_to_start():
    world, pid = _world_with_player(3, -2)
    log = MessageLog()
    for dx, dy in [(1, 0), (0, 1), (-1, 0), (0, -1)]:
        move_player(world, log, dx, dy)
    assert world.get(pid).position == Position(3, -2, 0)


def test_monster_blocks_move_and_is_reported():
    world, pid = _world_with_player()
    mid = world.spawn(monster=Monster(AIType.AGGRESSIVE), name="Goblin", position=Position(0, 1, 0))
    log = MessageLog()
    assert move_player(world, log, 0, 1) == mid
    assert world.get(pid).position == Position(0, 0, 0)
    assert log.messages == [("You encounter Goblin! Press 'A' to attack.", Color.ORANGE_RED)]


def test_monster_on_other_level_does_not_block():
    world, pid = _world_with_player()
    world.spawn(monster=Monster(AIType.PASSIVE), name="Goblin", position=Position(0, 1, 1))
    log = MessageLog()
    assert move_player(world, log, 0, 1) is None
    assert world.get(pid).position == Position(0, 1, 0)


def test_no_player_means_no_move():
    world = World()
    world.spawn(monster=Monster(AIType.PASSIVE), name="Goblin", position=Position(0, 1, 0))
    log = MessageLog()
    assert move_player(world, log, 0, 1) is None
    assert log.messages == []