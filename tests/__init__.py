import os

from analytics_api.models.pydantic.authentication import User

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")

REGIONS_CSV = "regions.csv"
VISITORS_CSV = "visitors.csv"

USER_1 = User(
    id="userid_123",
    name="Jane Doe",
    email="jane@example.org",
    role="USER",
    groups=["group_a", "group_b"],
)

USER_2 = User(
    id="userid_456",
    name="John Roe",
    email="john@example.org",
    role="USER",
    groups=["group_b"],
)

ADMIN_1 = User(
    id="adminid_123",
    name="Ada Admin",
    email="admin@example.org",
    role="ADMIN",
    groups=[],
)
