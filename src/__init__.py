"""Animation Resolver - resolve Roblox emote catalog items to animation ids."""

__version__ = "0.1.0"
