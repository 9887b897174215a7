"""Textos fixos das respostas do bot.

Vocabulário de comandos mapeado para textos de resposta; a correspondência
é feita em app/services/line_fixed_replies.py.
"""

from __future__ import annotations

GREETING_TRIGGERS = ("hello", "hi", "oi", "olá", "ola")
HELP_TRIGGERS = ("help", "ajuda")
TIME_TRIGGERS = ("time", "hora")
STICKER_TRIGGERS = ("sticker", "figurinha")
MENU_TRIGGERS = ("menu",)
ECHO_PREFIXES = ("echo ", "eco ")

GREETING_TEXT = "Olá! Como posso ajudar?"
HELP_TEXT = (
    "Comandos disponíveis:\n"
    "• hello - cumprimentar\n"
    "• help - mostrar esta ajuda\n"
    "• time - mostrar a hora atual\n"
    "• sticker - enviar uma figurinha\n"
    "• menu - abrir o menu de opções\n"
    "• echo <texto> - repetir o texto"
)
TIME_PREFIX = "Hora atual: "
TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
ECHO_PREFIX = "Eco: "
FALLBACK_TEXT = "Não entendi. Digite 'help' para ver os comandos disponíveis."

DEFAULT_STICKER_PACKAGE_ID = "1"
DEFAULT_STICKER_ID = "1"

MENU_ALT_TEXT = "Menu de opções"
MENU_TITLE = "Menu"
MENU_TEXT = "Escolha uma opção"
MENU_HELP_LABEL = "Ajuda"
MENU_TIME_LABEL = "Hora atual"
MENU_TIME_POSTBACK = "action=time"
MENU_DOCS_LABEL = "Documentação"
MENU_DOCS_URI = "https://developers.line.biz/en/docs/messaging-api/"

# Respostas por tipo de evento
FOLLOW_WELCOME_TEXT = "Bem-vindo! Obrigado por adicionar o bot."
JOIN_WELCOME_TEXT = "Olá a todos! Sou o assistente do grupo."
STICKER_ACK_TEXT = "Figurinha recebida!"
IMAGE_ACK_TEXT = "Imagem recebida!"
POSTBACK_PREFIX = "Postback recebido: "
INVALID_CONTENT_TEXT = "Desculpe, sua mensagem contém conteúdo inválido."
