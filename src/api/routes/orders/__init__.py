"""Rotas de pedidos."""
