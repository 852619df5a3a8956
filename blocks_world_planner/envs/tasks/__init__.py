from . import random_arrangement_task, sorted_tower_task
