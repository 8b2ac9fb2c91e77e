# backend/modules/email/__init__.py

"""
Transactional auth emails (signup verification, password reset) delivered
for the identity provider's send-email hook.
"""
