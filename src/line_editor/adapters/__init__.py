"""Host front-ends for the editor."""
