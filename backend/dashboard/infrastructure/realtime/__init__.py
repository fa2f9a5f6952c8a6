from .change_feed import InProcessChangeFeed

__all__ = ["InProcessChangeFeed"]
