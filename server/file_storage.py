"""File-based key-value storage."""

import json
import logging
import os

from sprout.interfaces import KeyValueStore

logger = logging.getLogger(__name__)


class FileStore(KeyValueStore):
    """Key-value store persisted as one JSON object in a file."""

    def __init__(self, path: str):
        self.path = path
        self._data = self._load()

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring state file {self.path}: expected an object")
            return {}
        return data

    def get(self, key: str, default=None):
        return self._data.get(key, default)

    def set(self, key: str, value) -> None:
        self._data[key] = value
        with open(self.path, 'w') as f:
            json.dump(self._data, f, indent=2)


class FileStorage:
    """Hands out one FileStore per user, all under state_dir."""

    def __init__(self, state_dir: str = None):
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.state_dir = state_dir or project_root
        os.makedirs(self.state_dir, exist_ok=True)

    def _get_state_file(self, user_id: str) -> str:
        """Get state file path for a user."""
        if user_id == "default":
            return os.path.join(self.state_dir, 'sprout_state.json')
        return os.path.join(self.state_dir, f'sprout_state_{user_id}.json')

    def store_for(self, user_id: str = "default") -> FileStore:
        return FileStore(self._get_state_file(user_id))

    def list_users(self) -> list[str]:
        """List all existing user IDs."""
        users = []
        if os.path.exists(self.state_dir):
            for filename in os.listdir(self.state_dir):
                if filename == 'sprout_state.json':
                    users.append('default')
                elif filename.startswith('sprout_state_') and filename.endswith('.json'):
                    user_id = filename[13:-5]  # Remove 'sprout_state_' and '.json'
                    users.append(user_id)
        return users

    def user_exists(self, user_id: str) -> bool:
        """Check if a user exists."""
        return os.path.exists(self._get_state_file(user_id))

    def delete_user(self, user_id: str) -> bool:
        """Delete a user's state file."""
        state_file = self._get_state_file(user_id)
        if os.path.exists(state_file):
            os.remove(state_file)
            return True
        return False
