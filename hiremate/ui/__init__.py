"""NiceGUI interface for the interview coach.

Responsibilities:
    - Chat bubbles with answers rendered while they stream in
    - New conversation button and credit balance in the header

Holds no coaching logic. Every question goes through the chat client.
"""
