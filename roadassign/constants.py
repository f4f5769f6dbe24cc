"""Message identifiers shared by the roadside unit and the vehicles."""

FIRST = "First vehicle"
RSU_IDENTIFY = "RSU"


def rsu_address(node_id: int) -> str:
    """Return the address string that targets the node with ``node_id``."""
    return f"{RSU_IDENTIFY}{node_id}"