# The registry of game config classes
GAME_CONFIG_REGISTRY = {}

# The registry of environment classes
ENVIRONMENT_REGISTRY = {}

def register_game_config(kind: str):
    def deco(cls):
        GAME_CONFIG_REGISTRY[kind] = cls
        return cls
    return deco

def register_environment(kind: str):
    def deco(cls):
        ENVIRONMENT_REGISTRY[kind] = cls
        return cls
    return deco
