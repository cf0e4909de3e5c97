"""Leave Management System package.

Feature modules (users, assignments, leaves, activity) each carry a model,
a repository protocol with a MySQL implementation, a service holding the
business rules and a thin Flask controller exposing the JSON API.
"""
