#!/usr/bin/env python3
"""Demo of a two-player Atlas game."""

from atlas.errors import ValidationError
from atlas.game import AtlasGame
from atlas.session import GameSession
from atlas.storage import MemoryStore


# Scripted moves so the demo runs without a keyboard
def demo_atlas():
    """Play a short scripted game and show the saved snapshot."""
    print("🌍 Wordchain - Atlas Demo")
    print("=" * 50)

    store = MemoryStore()
    session = GameSession(player_count=2, store=store)
    game = AtlasGame(session)

    for place in ["Delhi", "Indore", "Everest", "Delhi", "   ", "Tokyo", "Ottawa"]:
        print(f"\nPlayer {session.current_player} plays {place!r}")
        try:
            session.submit(place)
            print(f"  accepted, next letter '{session.last_letter}'")
        except ValidationError as e:
            print(f"  rejected: {e}")

    game.display()

    print("\nSaved snapshot:")
    print(store.get(session.storage_key))

    resumed = GameSession.load(store)
    print(f"\nResumed game has {len(resumed.entries)} places, {resumed.prompt()}")

    game.display_result(session.finish())
    print("Demo complete!")


if __name__ == "__main__":
    demo_atlas()
