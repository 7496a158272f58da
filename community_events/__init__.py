"""Community events backend: events, RSVPs with capacity and waitlist, profiles."""
