"""Board generation and word discovery for the WordSprint daily puzzle."""
