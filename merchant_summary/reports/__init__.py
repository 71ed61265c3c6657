"""Report builders: JSON payloads and Excel exports."""
