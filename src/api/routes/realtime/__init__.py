"""Canal WebSocket de eventos de pagamento."""
