from typing import TypedDict


class FTStatResult(TypedDict):
    is_file: bool
    size: int | None


class FTStats(TypedDict):
    dir_count: int
    file_count: int
    node_count: int
    max_nodes: int | None
