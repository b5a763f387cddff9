"""Stack summaries, log printing and exit-code metrics categories."""