"""Rotas do webhook Casso."""
