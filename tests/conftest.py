from jwkpem.testing_utils import key_document, key_document_file  # noqa: F401
