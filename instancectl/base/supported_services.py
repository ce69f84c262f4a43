from typing import Literal


existing_services = Literal[
    "prober",
    "resolver",
    "compute",
]


existing_cloud_providers = Literal["ovh"]


existing_operations = Literal[
    "create",
    "start",
    "stop",
    "shelve",
]
