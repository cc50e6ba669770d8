SITARIDA_DB = 'sitarida'
FINANCE_APP = 'finance'


class SitaridaRouter:
    """Send the finance app to the SITARIDA database and keep everything else off it"""

    def db_for_read(self, model, **hints):
        if model._meta.app_label == FINANCE_APP:
            return SITARIDA_DB
        return None

    def db_for_write(self, model, **hints):
        if model._meta.app_label == FINANCE_APP:
            return SITARIDA_DB
        return None

    def allow_relation(self, obj1, obj2, **hints):
        apps = {obj1._meta.app_label, obj2._meta.app_label}
        if FINANCE_APP in apps:
            return apps == {FINANCE_APP}
        return None

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        if app_label == FINANCE_APP:
            return db == SITARIDA_DB
        return db != SITARIDA_DB
