# common/db_utils.py
import os
import json
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from schemas import Snapshot
from .status import log

# ---------------- Serialization ----------------
def snapshot_records(snapshot: Snapshot) -> List[Dict[str, Any]]:
    """Records as plain dicts, `sequence_id` written under its wire name `id`."""
    return [r.model_dump(by_alias=True) for r in snapshot.records]

def snapshot_document(name: str, snapshot: Snapshot) -> Dict[str, Any]:
    # Consumers read numbers.json -> "numbers", messages.json -> "messages".
    return {
        "success": snapshot.success,
        "saved_at": datetime.now().isoformat(),
        name: snapshot_records(snapshot),
    }

# ---------------- JSON ----------------
def save_to_json(name: str, snapshot: Snapshot, output_dir: str = "./data") -> int:
    """
    Write one snapshot to <output_dir>/<name>.json, replacing the previous run's file.
    Returns the number of records written.
    """
    if not os.path.isdir(output_dir):
        os.makedirs(output_dir, exist_ok=True)
        log(f"Created data directory {output_dir}", "success")

    file_path = os.path.join(output_dir, f"{name}.json")
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(snapshot_document(name, snapshot), f, indent=2, ensure_ascii=False)

    count = len(snapshot.records)
    log(f"Saved {name}.json ({count} items)", "success")
    return count

# ---------------- MongoDB ----------------
def get_db(mongo_uri: str, db_name: str = "sms_panel"):
    """Return a MongoDB database handle for the configured URI."""
    client = MongoClient(mongo_uri)
    return client[db_name]

def save_to_mongo(name: str, snapshot: Snapshot, db) -> int:
    """
    Mirror a snapshot into the `name` collection. Each run is a full snapshot,
    so the collection is replaced, never merged. Failed snapshots are skipped
    so the last good one stays readable.
    """
    if not snapshot.success:
        log(f"Skipped MongoDB update for {name}: snapshot failed", "warning")
        return 0

    collection = db[name]
    docs = snapshot_records(snapshot)
    saved_at = datetime.now(timezone.utc)
    for d in docs:
        d["saved_at"] = saved_at

    try:
        collection.delete_many({})
        if docs:
            collection.insert_many(docs)
        log(f"Saved {len(docs)} records into MongoDB: {db.name}.{name}", "success")
    except PyMongoError as e:
        log(f"Failed saving {name} into MongoDB: {e}", "warning")
        return 0
    return len(docs)

# ---------------- Sink ----------------
class SnapshotSink:
    """Persists each snapshot as soon as the orchestrator hands it over."""

    def __init__(self, output_dir: str = "./data", db: Optional[Any] = None):
        self.output_dir = output_dir
        self.db = db

    def persist(self, name: str, snapshot: Snapshot) -> int:
        count = save_to_json(name, snapshot, self.output_dir)
        if self.db is not None:
            save_to_mongo(name, snapshot, self.db)
        return count
