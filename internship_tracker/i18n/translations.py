# -*- coding: utf-8 -*-
"""
Translation dictionaries for German and English.

This module contains all translatable strings for the Internship Hours Tracker.
"""

TRANSLATIONS = {
    "en": {
        # Application
        "app.name": "Internship Hours Tracker",

        # Weekdays
        "day.monday": "Monday",
        "day.tuesday": "Tuesday",
        "day.wednesday": "Wednesday",
        "day.thursday": "Thursday",
        "day.friday": "Friday",
        "day.saturday": "Saturday",

        # Categories
        "category.direct": "Direct Hours",
        "category.indirect": "Indirect Hours",
        "category.direct_subtotal": "Direct Hours Subtotal",
        "category.indirect_subtotal": "Indirect Hours Subtotal",
        "hour_type.direct_label": "{name} Counseling",

        # Hours table / reports
        "report.title": "Internship hours for {week} - {day}",
        "report.no_week": "No week selected",
        "report.col_hour_type": "Hour Type",
        "report.col_daily": "Daily Hours",
        "report.col_weekly": "Weekly Total",
        "report.col_overall": "Overall Total",
        "report.col_total": "Total",
        "report.row_total": "Total Hours",
        "report.weeks_tracked": "Weeks tracked: {count}",
        "report.generated": "Generated: {date}",
        "report.sheet_summary": "Summary",
        "report.chart_title": "Overall hours by category",

        # Command line
        "cli.week_created": "Created {name} ({id})",
        "cli.week_deleted": "Deleted week {id}",
        "cli.week_not_found": "Week not found: {id}",
        "cli.no_weeks": "No weeks yet",
        "cli.week_cleared": "Cleared all hours of {name}",
        "cli.hour_set": "{week} / {day} / {hour_type} = {value}",
        "cli.type_added": "Added {category} hour type '{name}'",
        "cli.type_not_added": "Hour type '{name}' is empty or already exists",
        "cli.type_deleted": "Deleted {category} hour type '{name}'",
        "cli.type_not_deleted": "Cannot delete '{name}': unknown {category} type or the last one left",
        "cli.exported": "Data exported to {path}",
        "cli.imported": "Imported {count} weeks from {path}",
        "cli.import_failed": "Invalid data file",
        "cli.report_saved": "Report saved to {path}",
        "cli.save_failed": "Warning: changes could not be saved and are lost on exit",
        "cli.load_failed": "Stored data could not be read, nothing was changed: {error}",
    },
    "de": {
        # Application
        "app.name": "Praktikumsstunden-Tracker",

        # Weekdays
        "day.monday": "Montag",
        "day.tuesday": "Dienstag",
        "day.wednesday": "Mittwoch",
        "day.thursday": "Donnerstag",
        "day.friday": "Freitag",
        "day.saturday": "Samstag",

        # Categories
        "category.direct": "Direkte Stunden",
        "category.indirect": "Indirekte Stunden",
        "category.direct_subtotal": "Zwischensumme direkte Stunden",
        "category.indirect_subtotal": "Zwischensumme indirekte Stunden",
        "hour_type.direct_label": "{name} Beratung",

        # Hours table / reports
        "report.title": "Praktikumsstunden für {week} - {day}",
        "report.no_week": "Keine Woche ausgewählt",
        "report.col_hour_type": "Stundenart",
        "report.col_daily": "Tagesstunden",
        "report.col_weekly": "Wochensumme",
        "report.col_overall": "Gesamtsumme",
        "report.col_total": "Summe",
        "report.row_total": "Stunden gesamt",
        "report.weeks_tracked": "Erfasste Wochen: {count}",
        "report.generated": "Erstellt: {date}",
        "report.sheet_summary": "Übersicht",
        "report.chart_title": "Gesamtstunden nach Kategorie",

        # Command line
        "cli.week_created": "{name} angelegt ({id})",
        "cli.week_deleted": "Woche {id} gelöscht",
        "cli.week_not_found": "Woche nicht gefunden: {id}",
        "cli.no_weeks": "Noch keine Wochen",
        "cli.week_cleared": "Alle Stunden von {name} gelöscht",
        "cli.hour_set": "{week} / {day} / {hour_type} = {value}",
        "cli.type_added": "Stundenart '{name}' ({category}) hinzugefügt",
        "cli.type_not_added": "Stundenart '{name}' ist leer oder existiert bereits",
        "cli.type_deleted": "Stundenart '{name}' ({category}) gelöscht",
        "cli.type_not_deleted": "'{name}' kann nicht gelöscht werden: unbekannte Art ({category}) oder die letzte ihrer Kategorie",
        "cli.exported": "Daten exportiert nach {path}",
        "cli.imported": "{count} Wochen aus {path} importiert",
        "cli.import_failed": "Ungültige Datendatei",
        "cli.report_saved": "Bericht gespeichert unter {path}",
        "cli.save_failed": "Warnung: Änderungen konnten nicht gespeichert werden und gehen beim Beenden verloren",
        "cli.load_failed": "Gespeicherte Daten konnten nicht gelesen werden, nichts wurde geändert: {error}",
    },
}
