"""
Default card catalog.

Seed data written to a player's store on first run: eight cards in each of
three themes, covering every rarity tier so no draw pool is empty.
"""

from cardvault.models.card import Card, Theme
from cardvault.models.rarity import Rarity


def _card(
    card_id: str,
    name: str,
    theme: Theme,
    rarity: Rarity,
    emoji: str,
    image: str,
    description: str,
) -> Card:
    return Card(
        id=card_id,
        name=name,
        theme=theme,
        base_rarity=rarity,
        description=description,
        emoji=emoji,
        image=f"images/{image}",
    )


_MC = Theme.MINECRAFT
_SPACE = Theme.SPACE
_DINO = Theme.DINOSAURS

DEFAULT_CARDS: tuple[Card, ...] = (
    # Minecraft
    _card("mc_01", "Creeper", _MC, Rarity.COMMON, "💚", "creeper.webp",
          "An explosive creature that destroys everything in its path."),
    _card("mc_02", "Enderman", _MC, Rarity.RARE, "👤", "enderman.webp",
          "A mysterious being able to teleport."),
    _card("mc_03", "Diamond", _MC, Rarity.VERY_RARE, "💎", "diamant.webp",
          "The most precious ore in the world of Minecraft."),
    _card("mc_04", "Ender Dragon", _MC, Rarity.EPIC, "🐉", "ender_dragon.webp",
          "The final boss ruling over the End."),
    _card("mc_05", "Steve", _MC, Rarity.LEGENDARY, "🧑‍🔧", "steve.webp",
          "The legendary hero of Minecraft."),
    _card("mc_06", "Zombie", _MC, Rarity.COMMON, "🧟", "zombie.webp",
          "An undead creature wandering through the night."),
    _card("mc_07", "Wither", _MC, Rarity.EPIC, "💀", "wither.webp",
          "A destructive three-headed boss."),
    _card("mc_08", "Emerald", _MC, Rarity.RARE, "💚", "emeraude.webp",
          "A precious gem used for trading."),
    # Astronomy
    _card("space_01", "Sun", _SPACE, Rarity.LEGENDARY, "☀️", "soleil.jpg",
          "Our star, source of all life on Earth."),
    _card("space_02", "Moon", _SPACE, Rarity.COMMON, "🌙", "lune.jpg",
          "Earth's natural satellite."),
    _card("space_03", "Mars", _SPACE, Rarity.RARE, "🔴", "mars.jpg",
          "The red planet, humanity's next destination."),
    _card("space_04", "Saturn", _SPACE, Rarity.VERY_RARE, "🪐", "saturne.jpg",
          "A planet with magnificent rings."),
    _card("space_05", "Black Hole", _SPACE, Rarity.EPIC, "⚫", "trou_noir.webp",
          "A cosmic object of infinite density."),
    _card("space_06", "Galaxy", _SPACE, Rarity.EPIC, "🌌", "galaxie.jpg",
          "A cluster of billions of stars."),
    _card("space_07", "Comet", _SPACE, Rarity.RARE, "☄️", "comete.jpg",
          "An icy traveller from the edges of the solar system."),
    _card("space_08", "Nebula", _SPACE, Rarity.VERY_RARE, "🌠", "nebuleuse.webp",
          "A cosmic cloud where stars are born."),
    # Dinosaurs
    _card("dino_01", "T-Rex", _DINO, Rarity.LEGENDARY, "🦖", "t_rex.png",
          "King of the Cretaceous predators."),
    _card("dino_02", "Triceratops", _DINO, Rarity.RARE, "🦕", "triceratops.webp",
          "A herbivore with three impressive horns."),
    _card("dino_03", "Velociraptor", _DINO, Rarity.VERY_RARE, "🦅", "velociraptor.webp",
          "A clever and fearsome hunter."),
    _card("dino_04", "Diplodocus", _DINO, Rarity.COMMON, "🦴", "diplodocus.jpg",
          "A giant with a long neck and an even longer tail."),
    _card("dino_05", "Pterodactyl", _DINO, Rarity.RARE, "🦋", "pterodactyle.jpg",
          "A flying reptile from prehistoric times."),
    _card("dino_06", "Spinosaurus", _DINO, Rarity.EPIC, "🐊", "spinosaure.webp",
          "An aquatic predator with a sail on its back."),
    _card("dino_07", "Ankylosaurus", _DINO, Rarity.COMMON, "🛡️", "ankylosaure.jpg",
          "A herbivore armored like a tank."),
    _card("dino_08", "Archaeopteryx", _DINO, Rarity.EPIC, "🪶", "archeopteryx.jpg",
          "The evolutionary link between dinosaurs and birds."),
)
