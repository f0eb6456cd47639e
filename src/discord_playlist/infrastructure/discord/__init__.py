"""Discord adapters: voice transport, text output channel, cog and bot."""
