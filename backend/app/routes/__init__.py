# Infrastructure routes (health, metrics) sit beside the marketplace routes;
# none of them carry a version prefix because the frontend calls them at root.
from . import (
    applications as applications,
    health as health,
    payments as payments,
    prometheus as prometheus,
    tuitions as tuitions,
    users as users,
)
