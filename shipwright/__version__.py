"""Version information for shipwright package"""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)
__author__ = "shipwright contributors"
__license__ = "MIT"
