"""REST API client for the sprout server."""

import requests


class SproutAPIClient:
    """Client for communicating with the sprout REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict) -> dict:
        """Make a POST request."""
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_themes(self) -> dict:
        response = self.session.get(f"{self.base_url}/api/themes")
        response.raise_for_status()
        return response.json()

    def user_exists(self) -> bool:
        response = self.session.get(f"{self.base_url}/api/users/{self.user_id}/exists")
        response.raise_for_status()
        return response.json()['exists']

    def delete_user(self) -> bool:
        """Forget this user's saved progress."""
        response = self.session.delete(f"{self.base_url}/api/users/{self.user_id}")
        response.raise_for_status()
        return response.json()['deleted']

    def get_status(self) -> dict:
        """Get learner status and progress."""
        return self._get("/api/status")

    def set_profile(self, age: int = None, theme: str = None) -> dict:
        return self._post("/api/profile", {'age': age, 'theme': theme})

    def get_next_word(self) -> dict:
        """Get the next word with its chunks."""
        return self._get("/api/word/next")

    def submit_attempt(self, sample: dict) -> dict:
        """Report a build-a-word attempt (PerformanceSample fields)."""
        return self._post("/api/word/attempt", {
            'word': sample['word'],
            'time_ms': sample['time_ms'],
            'hints_used': sample['hints_used'],
            'resets_used': sample['resets_used'],
            'completed': sample['completed']
        })

    def get_sentence(self) -> dict:
        return self._get("/api/sentence")

    def select_slot(self, index: int) -> dict:
        return self._post("/api/sentence/select", {'index': index})

    def fill_slot(self, word: str) -> dict:
        return self._post("/api/sentence/fill", {'word': word})

    def clear_slot(self, index: int) -> dict:
        return self._post("/api/sentence/clear", {'index': index})

    def reset_sentence(self) -> dict:
        return self._post("/api/sentence/reset", {})

    def next_sentence(self) -> dict:
        return self._post("/api/sentence/next", {})
