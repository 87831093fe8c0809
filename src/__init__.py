"""
Fiado Ledger - Credit Sale & Installment Service

A FastAPI-based microservice for a barbershop front office that registers
credit sales ("fiado"), splits them into monthly installments, records
payments and keeps sale status in sync with its installments.
"""

__version__ = "0.1.0"
