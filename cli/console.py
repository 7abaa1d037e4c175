"""Console UI for the sprout application."""

from sprout.building import WordBuildingTask
from cli.api_client import SproutAPIClient


class ConsoleUI:
    """Console user interface for building words and sentences."""

    def __init__(self, client: SproutAPIClient):
        self.client = client

    def print_cues(self, cues: list[str]):
        """Print read-aloud cues (the console has no voice)."""
        for cue in cues or []:
            print(f'  ~ {cue}')

    def print_task(self, task: WordBuildingTask):
        print('\n' + '-' * 40)
        arranged = ' + '.join(task.arranged) if task.arranged else '(empty)'
        print(f'Your word: {arranged}')
        print('Pieces:   ' + '  '.join(f'[{i + 1}] {chunk}' for i, chunk in enumerate(task.available)))
        print('-' * 40)

    def print_status(self, status: dict):
        """Print detailed status."""
        print('\n' + '=' * 50)
        print('STATUS SUMMARY')
        print('=' * 50)
        print(f'\nTheme: {status["theme"]}   Tier: {status["tier"]}   Age: {status["age"]}')
        perf = status['performance']
        print(f'Words attempted: {perf["total"]}, completed: {perf["completed"]}')
        window = status['adaptive']['window_stats']
        if window['count']:
            print(f'Recent ({window["count"]} words): avg {window["avg_time_ms"] / 1000:.1f}s, '
                  f'hints {window["hint_rate"]:.0%}, resets {window["reset_rate"]:.0%}')
        built = len(status['completed_words'])
        if status['sentence_stage_unlocked']:
            print(f'Words built: {built} - sentences unlocked! Type "sentences" to play.')
        else:
            print(f'Words built: {built}/{status["unlock_count"]} until sentences unlock')
        print('\n' + '=' * 50 + '\n')

    def print_attempt_result(self, result: dict):
        self.print_cues(result['cues'])
        if result['tier_changed']:
            if result['change_type'] == 'up':
                print(f"\n*** Great progress! Moving to {result['tier']} words ***\n")
            else:
                print(f"\n*** Switching to {result['tier']} words ***\n")
        if result['sentence_stage_unlocked']:
            print('Sentences are unlocked. Type "sentences" to build some!')

    def print_sentence(self, sentence: dict):
        print('\n' + '=' * 50)
        print(f"Sentence {sentence['template_index'] + 1}/{sentence['template_count']}: {sentence['text']}")
        if sentence.get('hint'):
            print(f"Hint: {sentence['hint']}")
        for i, slot in enumerate(sentence['slots']):
            if slot['type'] == 'fixed':
                continue
            marker = '>' if sentence['selected'] == i else ' '
            content = slot['content'] if slot['filled'] else '____'
            print(f" {marker} [{i}] {slot['type']}: {content}")
        if sentence['offerable_words']:
            print('Words: ' + ', '.join(sentence['offerable_words']))
        print('=' * 50)

    def play_word(self) -> bool:
        """Build one word. Returns False when the user wants to stop."""
        data = self.client.get_next_word()
        if not data['word']:
            print(f"No {data['tier']} words for {data['theme']}. Try another theme with --theme.")
            return False

        task = WordBuildingTask(data['word'], data['chunks'])
        task.available = list(data['shuffled'])
        print(f"\nBuild the word ({len(task.chunks)} pieces, {data['tier']}): {data['word']}")
        print('Sound it out: ' + ' - '.join(data['tts_chunks']))

        while not task.is_complete:
            self.print_task(task)
            user_input = input('==> ').strip().lower()

            if user_input == 'exit':
                return False
            elif user_input == 'hint':
                chunk = task.hint()
                print(f'Hint: {chunk}' if chunk else 'Fix the pieces you placed first (try "undo").')
            elif user_input == 'reset':
                task.reset()
            elif user_input == 'undo':
                task.remove(len(task.arranged) - 1)
            elif user_input == 'skip':
                break
            elif user_input == 'status':
                self.print_status(self.client.get_status())
            elif user_input == 'sentences':
                self.play_sentences()
            elif user_input.isdigit() and 1 <= int(user_input) <= len(task.available):
                task.place(task.available[int(user_input) - 1])
            elif user_input:
                if not task.place(user_input):
                    print('Pick a piece by its number.')

            if task.wrong_order:
                print('Right letters, wrong order! Let\'s try again.')
                task.reset()

        if task.is_complete:
            print(f'\n*** You built {task.word}! ***')
        result = self.client.submit_attempt(task.to_sample().to_dict())
        self.print_attempt_result(result)
        return True

    def play_sentences(self):
        """Sentence-building loop."""
        try:
            data = self.client.get_sentence()
        except Exception as e:
            print(f'Sentences are not available yet: {e}')
            return
        sentence = data['sentence']
        print('Commands: a number selects a blank, a word fills it, "clear N", "reset", "next", "back"')

        while True:
            self.print_sentence(sentence)
            user_input = input('sentence> ').strip()
            command = user_input.lower()

            if command == 'back':
                return
            elif command == 'reset':
                data = self.client.reset_sentence()
            elif command == 'next':
                data = self.client.next_sentence()
                if data['finished']:
                    self.print_cues(data['cues'])
                    print('\n*** You built every sentence! ***\n')
                    return
                if not data['advanced']:
                    print('Finish this sentence first.')
            elif command.startswith('clear '):
                index = command[6:].strip()
                if not index.isdigit():
                    print('Usage: clear N')
                    continue
                data = self.client.clear_slot(int(index))
            elif command.isdigit():
                data = self.client.select_slot(int(command))
                if not data['selected']:
                    print('Pick an empty blank.')
            elif command:
                data = self.client.fill_slot(user_input)
                result = data['result']
                if not result['accepted']:
                    if result['reason'] == 'no_slot_selected':
                        print('First pick an empty blank, then choose your word!')
                    else:
                        print(f"\"{result['word']}\" doesn't fit here. Try a {result['slot_type']} word!")
            else:
                continue

            self.print_cues(data.get('cues'))
            sentence = data['sentence']
            if sentence['complete'] and not sentence['finished']:
                print('Sentence complete! Type "next" for another.')

    def list_themes(self):
        themes = self.client.get_themes()
        for name in themes['themes']:
            marker = ' (default)' if name == themes['default'] else ''
            print(f'  {name}{marker}')

    def forget(self):
        if self.client.delete_user():
            print(f'Progress for {self.client.user_id} deleted.')
        else:
            print(f'No saved progress for {self.client.user_id}.')

    def run(self, age: int = None, theme: str = None):
        """Run the main application loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connected to sprout server ({health['service']})")
        except Exception:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        if theme is not None:
            themes = self.client.get_themes()
            if theme.lower() not in themes['themes']:
                print(f"Unknown theme '{theme}', using {themes['default']}. "
                      f"Themes: {', '.join(themes['themes'])}")
                theme = themes['default']

        if not self.client.user_exists():
            print(f"Hello, {self.client.user_id}! Let's build some words.")
        if age is not None or theme is not None:
            status = self.client.set_profile(age=age, theme=theme)
        else:
            status = self.client.get_status()
        print(f"Theme: {status['theme']}, tier: {status['tier']}, words built: {len(status['completed_words'])}")
        print('Commands: a number places a piece, "hint", "reset", "undo", "skip", "status", "sentences", "exit"\n')

        while True:
            try:
                if not self.play_word():
                    print('Goodbye!')
                    return
            except Exception as e:
                print(f"Error talking to server: {e}")
                return
