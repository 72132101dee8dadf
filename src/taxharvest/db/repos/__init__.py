from taxharvest.db.repos.posting_repo import PostingRepo

__all__ = ["PostingRepo"]
