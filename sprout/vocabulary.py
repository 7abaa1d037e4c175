"""Static word bank and sentence templates."""

# Theme -> tier -> words
WORD_BANK = {
    'animals': {
        'easy': ['cat', 'dog', 'pig', 'cow', 'hen', 'fish', 'duck', 'frog', 'bird', 'bee'],
        'regular': ['tiger', 'horse', 'sheep', 'snake', 'shark', 'whale', 'turtle', 'rabbit'],
        'challenge': ['elephant', 'giraffe', 'penguin', 'dolphin', 'cheetah', 'kangaroo'],
    },
    'space': {
        'easy': ['sun', 'moon', 'star', 'sky', 'rock', 'ship', 'mars', 'earth'],
        'regular': ['planet', 'rocket', 'comet', 'orbit', 'solar', 'lunar', 'galaxy', 'alien'],
        'challenge': ['astronaut', 'telescope', 'satellite', 'universe', 'spacecraft', 'nebula'],
    },
    'food': {
        'easy': ['pie', 'cake', 'milk', 'egg', 'jam', 'nuts', 'corn', 'rice', 'bread', 'soup'],
        'regular': ['pizza', 'apple', 'grape', 'orange', 'carrot', 'banana', 'cookie', 'pasta'],
        'challenge': ['spaghetti', 'hamburger', 'strawberry', 'sandwich', 'broccoli', 'watermelon'],
    },
    'vehicles': {
        'easy': ['car', 'bus', 'bike', 'boat', 'train', 'truck', 'van', 'taxi'],
        'regular': ['airplane', 'scooter', 'rocket', 'ferry', 'subway', 'tractor', 'jeep'],
        'challenge': ['helicopter', 'motorcycle', 'submarine', 'ambulance', 'bulldozer', 'limousine'],
    },
}

# Theme -> ordered template records. Plural keys override a blank type's word list.
SENTENCE_TEMPLATES = {
    'animals': [
        {
            'template': 'THE [ANIMAL] IS [ADJECTIVE]',
            'blanks': ['ANIMAL', 'ADJECTIVE'],
            'adjectives': ['BIG', 'SMALL', 'FAST', 'CUTE', 'FUNNY', 'SMART', 'WILD', 'TAME'],
            'hint': 'Describe what the animal is like!',
        },
        {
            'template': 'I SEE A [ADJECTIVE] [ANIMAL]',
            'blanks': ['ADJECTIVE', 'ANIMAL'],
            'adjectives': ['HUGE', 'TINY', 'HAPPY', 'SLEEPY', 'HUNGRY', 'PLAYFUL'],
            'hint': 'What kind of animal do you see?',
        },
        {
            'template': 'THE [ANIMAL] CAN [ACTION]',
            'blanks': ['ANIMAL', 'ACTION'],
            'actions': ['RUN', 'JUMP', 'SWIM', 'FLY', 'CLIMB', 'HUNT', 'SLEEP', 'PLAY'],
            'hint': 'What can the animal do?',
        },
        {
            'template': 'MY [COLOR] [ANIMAL] LIKES TO [ACTION]',
            'blanks': ['COLOR', 'ANIMAL', 'ACTION'],
            'colors': ['RED', 'BLUE', 'GREEN', 'BLACK', 'WHITE', 'BROWN', 'GRAY'],
            'actions': ['PLAY', 'SLEEP', 'EAT', 'RUN', 'HIDE', 'SING'],
            'hint': 'Tell us about your pet!',
        },
    ],
    'space': [
        {
            'template': 'THE [SPACE] IS [ADJECTIVE]',
            'blanks': ['SPACE', 'ADJECTIVE'],
            'adjectives': ['BRIGHT', 'DARK', 'HUGE', 'ROUND', 'FAR', 'CLOSE', 'HOT', 'COLD'],
            'hint': 'Describe what you see in space!',
        },
        {
            'template': 'I FLY TO THE [SPACE] IN MY [VEHICLE]',
            'blanks': ['SPACE', 'VEHICLE'],
            'vehicles': ['ROCKET', 'SPACESHIP', 'SHUTTLE', 'UFO'],
            'hint': 'How do you travel through space?',
        },
        {
            'template': 'THE [SPACE] HAS [NUMBER] [OBJECT]',
            'blanks': ['SPACE', 'NUMBER', 'OBJECT'],
            'numbers': ['ONE', 'TWO', 'MANY', 'NO'],
            'objects': ['MOONS', 'RINGS', 'ROCKS', 'ALIENS', 'STARS'],
            'hint': 'What can you count in space?',
        },
    ],
    'food': [
        {
            'template': 'I EAT [ADJECTIVE] [FOOD]',
            'blanks': ['ADJECTIVE', 'FOOD'],
            'adjectives': ['YUMMY', 'SWEET', 'HOT', 'COLD', 'FRESH', 'CRUNCHY', 'SOFT'],
            'hint': 'What kind of food do you like?',
        },
        {
            'template': 'FOR [MEAL] I WANT [FOOD]',
            'blanks': ['MEAL', 'FOOD'],
            'meals': ['BREAKFAST', 'LUNCH', 'DINNER', 'SNACK'],
            'hint': 'When do you eat this food?',
        },
        {
            'template': 'THE [FOOD] TASTES [TASTE]',
            'blanks': ['FOOD', 'TASTE'],
            'tastes': ['SWEET', 'SOUR', 'SALTY', 'SPICY', 'GOOD', 'GREAT'],
            'hint': 'How does the food taste?',
        },
    ],
    'vehicles': [
        {
            'template': 'THE [VEHICLE] IS [ADJECTIVE]',
            'blanks': ['VEHICLE', 'ADJECTIVE'],
            'adjectives': ['FAST', 'SLOW', 'BIG', 'SMALL', 'RED', 'BLUE', 'NEW', 'OLD'],
            'hint': 'Describe the vehicle!',
        },
        {
            'template': 'I RIDE IN A [ADJECTIVE] [VEHICLE]',
            'blanks': ['ADJECTIVE', 'VEHICLE'],
            'adjectives': ['FAST', 'SLOW', 'COOL', 'SHINY', 'NEW', 'BIG'],
            'hint': 'What kind of vehicle do you like?',
        },
        {
            'template': 'THE [VEHICLE] CAN [ACTION]',
            'blanks': ['VEHICLE', 'ACTION'],
            'actions': ['FLY', 'DRIVE', 'SAIL', 'FLOAT', 'SPEED', 'STOP'],
            'hint': 'What can the vehicle do?',
        },
    ],
}

# Word lists for static blank types when a template declares none
DEFAULT_BLANK_WORDS = {
    'adjective': ['BIG', 'SMALL', 'FAST', 'CUTE', 'FUNNY', 'SMART', 'HAPPY', 'BRAVE'],
    'action': ['RUN', 'JUMP', 'SWIM', 'FLY', 'PLAY', 'SLEEP', 'EAT', 'DANCE'],
    'color': ['RED', 'BLUE', 'GREEN', 'YELLOW', 'PURPLE', 'BLACK', 'WHITE', 'PINK'],
    'number': ['ONE', 'TWO', 'THREE', 'FOUR', 'FIVE', 'MANY', 'SOME'],
    'object': ['BALL', 'BOOK', 'CHAIR', 'TREE', 'HOUSE', 'TOY', 'FLOWER'],
    'place': ['HOME', 'SCHOOL', 'PARK', 'STORE', 'BEACH', 'GARDEN', 'PLAYGROUND'],
    'taste': ['SWEET', 'SOUR', 'SPICY', 'SALTY', 'YUMMY', 'DELICIOUS'],
    'meal': ['BREAKFAST', 'LUNCH', 'DINNER', 'SNACK', 'TREAT'],
    'temperature': ['HOT', 'COLD', 'WARM', 'COOL', 'FROZEN'],
    'speed': ['FAST', 'SLOW', 'QUICK'],
    'part': ['WHEELS', 'DOORS', 'WINDOWS', 'SEATS', 'ENGINE'],
}

# Extra vehicle words offered when a template has no vehicle override
DEFAULT_VEHICLE_EXTRAS = ['ROCKET', 'SPACESHIP', 'SHUTTLE', 'UFO', 'CAR', 'TRUCK', 'BUS', 'BIKE']
