"""
Journaling feature module.

Pure transforms over one owner's entries plus the service that feeds them:
- analytics: totals, sentiment, monthly/weekly series, top words
- memories: on-this-day lookup
- search: substring match with highlighted excerpts
- export: yearly chapter document and HTML renderer
- service: JournalService, the per-request pipeline
"""
