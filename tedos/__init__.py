"""TedOS content core: answer dependency resolution and chunk merging."""
