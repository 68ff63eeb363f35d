"""Domain Types — names for the user record and its stored fields.

Invariants:
    - REQUIRED_FIELDS order is the order missing fields are reported in
    - Stored timestamp keys match existing collections (createdAt/updatedAt)

Design Decisions:
    - Role stays free text: no closed set of roles is enforced
"""


# ─── Stored Fields ───────────────────────────────────────────────

ID_FIELD = "_id"
CREATED_AT_FIELD = "createdAt"
UPDATED_AT_FIELD = "updatedAt"

REQUIRED_FIELDS: tuple[str, ...] = ("name", "email", "password", "age", "role")
