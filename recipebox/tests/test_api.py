import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from recipebox.api.api_run import create_app
from recipebox.tests.backend_stub import FakeBackend, make_controller


class TestRecipeBoxAPI(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.backend = FakeBackend(token="tok")
        self.controller = make_controller(self.backend, Path(self._tmp.name) / "token.json")
        self.client = TestClient(create_app(self.controller))
        self.client.__enter__()  # runs startup: recipes are loaded

    def tearDown(self):
        self.client.__exit__(None, None, None)
        self._tmp.cleanup()

    def _drain(self):
        self.client.portal.call(self.controller.sync.drain)

    def test_recipes_loaded_on_startup(self):
        resp = self.client.get('/api/recipes')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['count'], 3)
        self.assertEqual(data['recipes'][1]['related'], '')

    def test_get_recipe_and_missing(self):
        self.assertEqual(self.client.get('/api/recipes/r3').json()['recipe']['title'], 'Tomato Soup')
        self.assertEqual(self.client.get('/api/recipes/zzz').status_code, 404)

    def test_reload_failure_is_502(self):
        self.backend.read_error = 'offline'
        resp = self.client.post('/api/recipes/reload')
        self.assertEqual(resp.status_code, 502)
        self.assertEqual(resp.json()['detail'], 'Could not load recipes')

    def test_search(self):
        data = self.client.get('/api/recipes/search', params={'q': 'Soup'}).json()
        self.assertEqual([r['id'] for r in data['recipes']], ['r3'])

    def test_tab_lifecycle(self):
        self.assertEqual(self.client.post('/api/tabs/r1').status_code, 200)
        resp = self.client.post('/api/tabs/r2', params={'source': 'related'})
        self.assertEqual(resp.json()['tabs']['sidebar_active_id'], 'r2')
        self.client.delete('/api/tabs/r2')
        tabs = self.client.get('/api/tabs').json()
        self.assertEqual(tabs['active_id'], 'r1')
        snapshot = self.client.delete('/api/tabs/r1').json()
        self.assertEqual(snapshot['state'], 'empty')
        self.assertEqual(self.client.post('/api/tabs/zzz').status_code, 404)
        self.assertEqual(self.client.post('/api/tabs/r1', params={'source': 'elsewhere'}).status_code, 422)

    def test_edit_active_recipe(self):
        self.assertEqual(self.client.put('/api/recipes/active/notes', json={'value': 'x'}).status_code, 404)
        self.client.post('/api/tabs/r3')
        resp = self.client.put('/api/recipes/active/notes', json={'value': 'add basil'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['recipe']['notes'], 'add basil')
        self.assertEqual(self.client.put('/api/recipes/active/servings', json={'value': '2'}).status_code, 422)
        self._drain()
        self.assertEqual(self.backend.posts_for('recipe-update')[-1]['value'], 'add basil')

    def test_create_recipe(self):
        resp = self.client.post('/api/recipes')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['recipe']['title'], 'New Recipe')
        self.assertEqual(data['tabs']['active_id'], data['recipe']['id'])

    def test_related(self):
        data = self.client.get('/api/recipes/r1/related').json()
        self.assertEqual(data['related'], [{'id': 'r2', 'title': 'Omelette'}])

    def test_shopping_flow(self):
        self.client.post('/api/shopping-list/init', json={'shopping_list': 'milk,eggs', 'suggestions': 'apples'})
        data = self.client.post('/api/shopping-list/items', json={'texts': ['Milk', ' Bread '], 'position': 'tail'}).json()
        self.assertEqual([i['text'] for i in data['items']], ['milk', 'eggs', 'bread'])
        dup = self.client.post('/api/shopping-list/item', json={'text': 'EGGS'})
        self.assertEqual(dup.status_code, 409)
        self.assertEqual(dup.json()['detail'], 'Already in list')
        added = self.client.post('/api/shopping-list/item', json={'text': 'jam'}).json()
        self.assertEqual(added['items'][0]['text'], 'jam')
        item_id = added['added']['id']
        self.client.put(f'/api/shopping-list/item/{item_id}', json={'text': 'Apricot Jam'})
        self.client.delete(f'/api/shopping-list/item/{item_id}')
        self.assertEqual(self.client.delete(f'/api/shopping-list/item/{item_id}').status_code, 404)
        suggestions = self.client.get('/api/suggestions').json()['suggestions']
        self.assertEqual(suggestions, ['apples', 'apricot jam', 'jam'])
        self._drain()
        self.assertIn('milk,eggs,bread', [p['value'] for p in self.backend.posts_for('shopping-list-update')])

    def test_delete_suggestion(self):
        self.client.post('/api/shopping-list/init', json={'shopping_list': '', 'suggestions': 'apples,carrots'})
        data = self.client.delete('/api/suggestions/carrots').json()
        self.assertEqual(data['remaining'], ['apples'])
        self._drain()
        self.assertEqual(self.backend.posts_for('shopping-suggestions-update')[-1]['value'], 'apples')

    def test_generate_from_open_tabs(self):
        self.client.post('/api/tabs/r3')
        text = self.client.post('/api/shopping-list/generate', json={'clear': True}).json()['text']
        self.assertEqual(text.split('\n')[:3], ['Tomato Soup:', '4 tomatoes', '1 onion'])

    def test_modes(self):
        self.assertTrue(self.client.post('/api/shopping-list/sort-mode').json()['sort_mode'])
        data = self.client.post('/api/shopping-list/suggest-mode').json()
        self.assertTrue(data['suggest_mode'])
        self.assertEqual(data['suggestions'], ['apples', 'berries', 'carrots'])

    def test_events_feed(self):
        first = self.client.get('/api/events').json()
        self.assertTrue(any(e['type'] == 'recipes.ready' for e in first['events']))
        self.client.post('/api/tabs/r1')
        newer = self.client.get('/api/events', params={'since': first['next_cursor']}).json()
        self.assertEqual([e['type'] for e in newer['events']], ['tabs.changed'])

    def test_item_with_separator_is_400(self):
        self.client.post('/api/shopping-list/init', json={'shopping_list': 'milk', 'suggestions': ''})
        resp = self.client.post('/api/shopping-list/item', json={'text': 'eggs, large'})
        self.assertEqual(resp.status_code, 400)
        item_id = self.client.get('/api/shopping-list').json()['items'][0]['id']
        resp = self.client.put(f'/api/shopping-list/item/{item_id}', json={'text': 'whole, milk'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual([i['text'] for i in self.client.get('/api/shopping-list').json()['items']], ['milk'])
