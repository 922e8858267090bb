"""Casos de uso (orquestração sem IO direto; IO via protocolos)."""
