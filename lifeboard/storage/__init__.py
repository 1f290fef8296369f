from .board_store import BoardStore, JsonBoardStore, create_store

__all__ = ['BoardStore', 'JsonBoardStore', 'create_store']
