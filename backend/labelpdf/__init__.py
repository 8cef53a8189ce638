"""Склейка PDF документа со страницами-этикетками."""
