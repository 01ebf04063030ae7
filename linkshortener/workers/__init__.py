from linkshortener.workers.reclaimer import ReclamationWorker


__all__ = ['ReclamationWorker']
