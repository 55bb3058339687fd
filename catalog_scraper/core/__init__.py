"""Cross-cutting helpers: exceptions and logging setup."""
