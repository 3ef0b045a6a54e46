from .cards import delete_card, invalidate_cache, list_cards, update_card, upsert_card

__all__ = ["delete_card", "invalidate_cache", "list_cards", "update_card", "upsert_card"]
