"""AiAgenz Vault Meta information.
   AiAgenz Vault seals and opens per-project credentials at rest.
"""
__title__ = 'aiagenz_vault'
__description__ = (
   'AiAgenz Vault seals and opens per-project third-party '
   'credentials with AES-256-GCM.'
)
__version__ = '0.3.0'
__copyright__ = 'Copyright (c) 2026 AiAgenz'
__author__ = 'AiAgenz'
__author_email__ = 'dev@aiagenz.id'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/aiagenz/aiagenz-vault'
