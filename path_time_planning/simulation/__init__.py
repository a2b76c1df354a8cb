from .scenario import Scenario, load_scenario, obstacle_from_dict

__all__ = ['Scenario', 'load_scenario', 'obstacle_from_dict']
