from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'room_attempts': 0,
        'rooms_placed': 0,
        'monsters_spawned': 0,
        'connect_iterations': 0,
        'skipped_no_target': 0,
        'corridors_attempted': 0,
        'corridors_carved': 0,
        'corridor_steps': 0,
        'dead_ends': 0,
        'early_merges': 0,
        'wall_joins': 0,
        'path_joins': 0,
        'step_overflows': 0,
        'set_merges': 0,
        'doors_created': 0,
        'runtime_ms': 0.0,
    }
