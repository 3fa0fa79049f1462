"""Expression operators, container and math helpers, hashing/JSON helpers and the eql template language."""