"""Small cross-cutting helpers."""
