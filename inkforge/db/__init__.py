from inkforge.db.database import dispose_db, get_session, init_db
from inkforge.db.operations import (
    add_collection_entry,
    card_to_dict,
    get_approved_cards,
    get_collection_entries,
    get_owned_quantities,
    list_approved_cards,
    remove_collection_entry,
    upsert_card,
)

__all__ = [
    "add_collection_entry",
    "card_to_dict",
    "dispose_db",
    "get_approved_cards",
    "get_collection_entries",
    "get_owned_quantities",
    "get_session",
    "init_db",
    "list_approved_cards",
    "remove_collection_entry",
    "upsert_card",
]
