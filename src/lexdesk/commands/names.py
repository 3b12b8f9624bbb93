"""Names of the commands understood by the workflow handlers."""

# Legal texts
VIEW_LEGAL_TEXT = 'view-legal-text'
DOWNLOAD_LEGAL_TEXT = 'download-legal-text'
SHARE_LEGAL_TEXT = 'share-legal-text'
ADD_LEGAL_TEXT = 'add-legal-text'
EDIT_LEGAL_TEXT = 'edit-legal-text'
DELETE_LEGAL_TEXT = 'delete-legal-text'

# Procedures
VIEW_PROCEDURE = 'view-procedure'
ADD_PROCEDURE = 'add-procedure'
EDIT_PROCEDURE = 'edit-procedure'
DELETE_PROCEDURE = 'delete-procedure'

# News
READ_NEWS = 'read-news'
ADD_NEWS = 'add-news'
EDIT_NEWS = 'edit-news'
DELETE_NEWS = 'delete-news'

# Search
IMMERSIVE_SEARCH = 'immersive-search'
SAVE_SEARCH = 'save-search'
EXECUTE_SAVED_SEARCH = 'execute-saved-search'
EDIT_SAVED_SEARCH = 'edit-saved-search'
DELETE_SAVED_SEARCH = 'delete-saved-search'

# Favorites
ADD_TO_FAVORITES = 'add-to-favorites'
REMOVE_FROM_FAVORITES = 'remove-from-favorites'
VIEW_FAVORITES = 'view-favorites'

# Templates
CREATE_TEMPLATE = 'create-template'
USE_TEMPLATE = 'use-template'
EDIT_TEMPLATE = 'edit-template'
DELETE_TEMPLATE = 'delete-template'

# Data transfer
EXPORT_DATA = 'export-data'
IMPORT_DATA = 'import-data'
DOWNLOAD_RESOURCE = 'download-resource'

# Review
APPROVE_DOCUMENT = 'approve-document'
REJECT_DOCUMENT = 'reject-document'
REQUEST_CHANGES_DOCUMENT = 'request-changes-document'
REQUEST_CHANGES = 'request-changes'

# Navigation
NAVIGATE_TO_SECTION = 'navigate-to-section'
SECTION_CHANGE = 'section-change'

# Internal, answered by exactly one outstanding confirmation listener
CONFIRM_DELETE = 'confirm-delete'
