"""Request pipeline: dispatch, assembly, negotiation, finalization, sending."""
