# CryptShell command implementations (dispatcher, mount, init, passwd, unmount)
