"""Tests for the sprout HTTP API and file storage."""

import json
import os
import tempfile
import unittest

from fastapi.testclient import TestClient

import server.app as server_app
from server.file_storage import FileStorage, FileStore
from sprout.config import KEY_COMPLETED_WORDS


class TestFileStorage(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.storage = FileStorage(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_values_survive_reload(self):
        store = self.storage.store_for('maya')
        store.set(KEY_COMPLETED_WORDS, ['CAT'])
        self.assertEqual(self.storage.store_for('maya').get(KEY_COMPLETED_WORDS), ['CAT'])
        self.assertTrue(self.storage.user_exists('maya'))
        self.assertEqual(self.storage.list_users(), ['maya'])

    def test_default_user_file(self):
        self.storage.store_for().set('user-age', 7)
        self.assertTrue(os.path.exists(os.path.join(self.tmp.name, 'sprout_state.json')))
        self.assertEqual(self.storage.list_users(), ['default'])

    def test_unreadable_file_starts_empty(self):
        path = os.path.join(self.tmp.name, 'sprout_state_broken.json')
        with open(path, 'w') as f:
            f.write('{oops')
        self.assertIsNone(FileStore(path).get('user-age'))
        with open(path, 'w') as f:
            json.dump(['not', 'an', 'object'], f)
        self.assertEqual(FileStore(path).get('user-age', 10), 10)

    def test_delete_user(self):
        self.storage.store_for('sam').set('user-age', 9)
        self.assertTrue(self.storage.delete_user('sam'))
        self.assertFalse(self.storage.delete_user('sam'))
        self.assertFalse(self.storage.user_exists('sam'))


class TestAPI(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        server_app.init_services(state_dir=self.tmp.name)
        self.client = TestClient(server_app.app)

    def tearDown(self):
        self.tmp.cleanup()

    def attempt(self, word: str, time_ms: int = 4000, **kwargs) -> dict:
        response = self.client.post('/api/word/attempt', json={'word': word, 'time_ms': time_ms, **kwargs})
        self.assertEqual(response.status_code, 200)
        return response.json()

    def unlock_sentences(self):
        self.client.post('/api/profile', json={'age': 6})
        for word in ['CAT', 'DOG', 'PIG', 'COW', 'HEN']:
            result = self.attempt(word)
        self.assertTrue(result['sentence_stage_unlocked'])

    def test_health(self):
        self.assertEqual(self.client.get('/').json(), {'service': 'sprout', 'status': 'ok'})

    def test_themes(self):
        data = self.client.get('/api/themes').json()
        self.assertEqual(data['themes'], ['animals', 'food', 'space', 'vehicles'])
        self.assertEqual(data['default'], 'animals')

    def test_words(self):
        data = self.client.get('/api/words', params={'theme': 'animals', 'tier': 'easy'}).json()
        self.assertEqual(data['words'][0], 'cat')

        data = self.client.get('/api/words', params={'theme': 'dinosaurs', 'tier': 'easy'}).json()
        self.assertEqual(data['theme'], 'animals')

        data = self.client.get('/api/words', params={'theme': 'animals', 'tier': 'legendary'}).json()
        self.assertEqual(data['words'], [])

    def test_chunks(self):
        data = self.client.get('/api/chunks/jumping').json()
        self.assertEqual(data['word'], 'JUMPING')
        self.assertEqual(data['chunks'][-1], 'ING')

    def test_chunks_from_enhanced_word_bank(self):
        path = os.path.join(self.tmp.name, 'wordBank.json')
        with open(path, 'w') as f:
            json.dump({
                'metadata': {'version': '1.0', 'total_words': 1},
                'words': {'easy': [{'word': 'ship', 'chunks': ['sh', 'ip'], 'tts_chunks': ['shih', 'p'],
                                    'themes': ['animals']}]},
            }, f)
        server_app.init_services(state_dir=self.tmp.name, word_bank_path=path)

        data = self.client.get('/api/chunks/ship', params={'theme': 'animals'}).json()
        self.assertEqual(data['chunks'], ['SH', 'IP'])
        self.assertEqual(data['tts_chunks'], ['shih', 'p'])
        self.assertTrue(data['authored'])

        self.client.post('/api/profile', json={'age': 6})
        data = self.client.get('/api/word/next').json()
        self.assertEqual(data['word'], 'SHIP')
        self.assertEqual(data['chunks'], ['SH', 'IP'])

    def test_profile_sets_tier(self):
        data = self.client.post('/api/profile', json={'age': 6, 'theme': 'space'}).json()
        self.assertEqual(data['tier'], 'easy')
        self.assertEqual(data['theme'], 'space')
        self.assertEqual(data['unlock_count'], 5)

    def test_profile_rejects_bad_age(self):
        response = self.client.post('/api/profile', json={'age': -4})
        self.assertEqual(response.status_code, 422)

    def test_next_word(self):
        self.client.post('/api/profile', json={'age': 6})
        data = self.client.get('/api/word/next').json()
        self.assertEqual(data['word'], 'CAT')
        self.assertEqual(data['chunks'], ['CA', 'T'])
        self.assertEqual(sorted(data['shuffled']), sorted(data['chunks']))
        self.assertEqual(data['tts_chunks'], ['CA', 'T'])
        self.assertIsNone(server_app.user_sessions['default'].current_task)
        self.assertEqual(self.client.get('/api/word/next').json()['word'], 'DOG')

    def test_user_exists_and_delete(self):
        self.assertFalse(self.client.get('/api/users/maya/exists').json()['exists'])
        self.client.post('/api/profile', json={'user_id': 'maya', 'age': 6})
        self.assertTrue(self.client.get('/api/users/maya/exists').json()['exists'])
        self.attempt('CAT', user_id='maya')

        self.assertTrue(self.client.delete('/api/users/maya').json()['deleted'])
        self.assertNotIn('maya', server_app.user_sessions)
        self.assertFalse(self.client.get('/api/users/maya/exists').json()['exists'])
        status = self.client.get('/api/status', params={'user_id': 'maya'}).json()
        self.assertEqual(status['completed_words'], [])
        self.assertFalse(self.client.delete('/api/users/nobody').json()['deleted'])

    def test_user_endpoints_validate_id(self):
        self.assertEqual(self.client.get('/api/users/bad.id/exists').status_code, 400)
        self.assertEqual(self.client.delete('/api/users/bad.id').status_code, 400)

    def test_attempts_move_tier_up(self):
        self.client.post('/api/profile', json={'age': 6})
        self.assertFalse(self.attempt('CAT')['tier_changed'])
        self.attempt('DOG')
        result = self.attempt('PIG')
        self.assertTrue(result['tier_changed'])
        self.assertEqual(result['change_type'], 'up')
        self.assertEqual(result['tier'], 'regular')
        self.assertIn('Fantastic! You built the word: PIG', result['cues'])

    def test_attempt_validation(self):
        response = self.client.post('/api/word/attempt', json={'word': 'CAT', 'time_ms': -1})
        self.assertEqual(response.status_code, 422)

    def test_invalid_user_id(self):
        response = self.client.get('/api/status', params={'user_id': '../etc'})
        self.assertEqual(response.status_code, 400)

    def test_sentences_locked_until_enough_words(self):
        self.attempt('CAT')
        self.assertEqual(self.client.get('/api/sentence').status_code, 403)

    def test_sentence_flow(self):
        self.unlock_sentences()
        sentence = self.client.get('/api/sentence').json()['sentence']
        self.assertEqual(sentence['template'], 'THE [ANIMAL] IS [ADJECTIVE]')
        self.assertEqual(sentence['selected'], 1)

        data = self.client.post('/api/sentence/fill', json={'word': 'ROCKET'}).json()
        self.assertFalse(data['result']['accepted'])
        self.assertFalse(data['sentence']['slots'][1]['filled'])
        self.assertIn('Try a animal word instead', data['cues'])

        self.client.post('/api/sentence/fill', json={'word': 'cat'})
        data = self.client.post('/api/sentence/fill', json={'word': 'BIG'}).json()
        self.assertTrue(data['sentence']['complete'])
        self.assertEqual(data['sentence']['text'], 'THE CAT IS BIG')

        data = self.client.post('/api/sentence/clear', json={'index': 3}).json()
        self.assertTrue(data['cleared'])
        self.assertFalse(data['sentence']['complete'])

        self.client.post('/api/sentence/fill', json={'word': 'SMALL'})
        data = self.client.post('/api/sentence/next', json={}).json()
        self.assertTrue(data['advanced'])
        self.assertEqual(data['sentence']['template_index'], 1)

    def test_select_and_reset(self):
        self.unlock_sentences()
        data = self.client.post('/api/sentence/select', json={'index': 0}).json()
        self.assertFalse(data['selected'])
        data = self.client.post('/api/sentence/select', json={'index': 3}).json()
        self.assertTrue(data['selected'])
        self.client.post('/api/sentence/fill', json={'word': 'FAST'})
        data = self.client.post('/api/sentence/reset', json={}).json()
        self.assertFalse(data['sentence']['slots'][3]['filled'])

    def test_progress_survives_restart(self):
        self.client.post('/api/profile', json={'age': 6})
        self.attempt('CAT')
        self.attempt('DOG')
        server_app.init_services(state_dir=self.tmp.name)
        status = self.client.get('/api/status').json()
        self.assertEqual(status['completed_words'], ['CAT', 'DOG'])
        self.assertEqual(status['performance']['total'], 2)
        self.assertEqual(self.client.get('/api/users').json()['users'], ['default'])


if __name__ == '__main__':
    unittest.main()
